
"""
arbiter.py
Implements the TurnArbiter: the unbiased first-mover coin flip and the dice-assignment negotiation.
Related modules:
- engine.py: Calls decide_first_mover once per game and assign_dice once the first move is committed.
- config.py: Supplies the computer_first_pick and second_pick policies.
"""

import random
from typing import Optional, Tuple

from .config import COMPUTER_FIRST_PICKS, SECOND_PICKS
from .errors import InsufficientDice, InvalidSelection
from .rules import COMPUTER, USER, Party


class TurnArbiter:
    """
    Decides who picks a die first and resolves the two parties' die indices.
    The two returned indices always differ when at least two dice exist.
    """
    def __init__(self, rng: Optional[random.Random] = None, computer_first_pick: str = "random", second_pick: str = "offset"):
        if computer_first_pick not in COMPUTER_FIRST_PICKS:
            raise ValueError(f"computer_first_pick must be one of {COMPUTER_FIRST_PICKS}")
        if second_pick not in SECOND_PICKS:
            raise ValueError(f"second_pick must be one of {SECOND_PICKS}")
        self.rng = rng or random.SystemRandom()
        self.computer_first_pick = computer_first_pick
        self.second_pick = second_pick

    def decide_first_mover(self) -> Party:
        """Fair coin flip: USER or COMPUTER with probability 0.5 each."""
        return USER if self.rng.randrange(2) == 0 else COMPUTER

    def assign_dice(self, first_mover: Party, requested_index: Optional[int], dice_count: int) -> Tuple[int, int]:
        """
        Resolve the dice assignment.
        Args:
            first_mover (str): USER or COMPUTER.
            requested_index (int|None): The user's pick; required when the user moves first, ignored otherwise.
            dice_count (int): Number of dice in the shared set.
        Returns:
            tuple[int, int]: (user_die_index, computer_die_index).
        Raises:
            InsufficientDice: If fewer than two dice exist.
            InvalidSelection: If the user's pick is missing or out of range.
        """
        if dice_count < 2:
            raise InsufficientDice(f"at least 2 dice are needed to assign distinct dice, got {dice_count}")

        if first_mover == USER:
            user_index = self.validate_selection(requested_index, dice_count)
            computer_index = self._second_computer_pick(user_index, dice_count)
            return user_index, computer_index

        if first_mover == COMPUTER:
            if self.computer_first_pick == "zero":
                computer_index = 0
            else:
                computer_index = self.rng.randrange(dice_count)
            user_index = next_index(computer_index, dice_count)
            return user_index, computer_index

        raise ValueError(f"unknown first mover: {first_mover!r}")

    def _second_computer_pick(self, user_index: int, dice_count: int) -> int:
        if self.second_pick == "random_distinct":
            others = [i for i in range(dice_count) if i != user_index]
            return self.rng.choice(others)
        return next_index(user_index, dice_count)

    @staticmethod
    def validate_selection(index, dice_count: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelection(f"die index must be an integer in [0, {dice_count}), got {index!r}")
        if not (0 <= index < dice_count):
            raise InvalidSelection(f"die index must be in [0, {dice_count}), got {index}")
        return index


def next_index(index: int, dice_count: int) -> int:
    return (index + 1) % dice_count
