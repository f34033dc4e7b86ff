
"""
rules.py
Defines parties, outcomes and the winner rule for the fair dice game.
Related modules:
- engine.py: Uses determine_outcome after the rolls are revealed.
- verify.py: Re-checks the declared outcome from the revealed rolls.
"""

from typing import Literal

Party = Literal["USER", "COMPUTER"]
Outcome = Literal["USER_WINS", "COMPUTER_WINS", "TIE"]

USER: Party = "USER"
COMPUTER: Party = "COMPUTER"

USER_WINS: Outcome = "USER_WINS"
COMPUTER_WINS: Outcome = "COMPUTER_WINS"
TIE: Outcome = "TIE"

# committed integer for each first-mover choice
FIRST_MOVE_CODES = {USER: 0, COMPUTER: 1}


def determine_outcome(user_roll: int, computer_roll: int) -> Outcome:
    """
    Strictly greater roll wins; equal rolls are a tie and are not replayed.
    Args:
        user_roll (int): Value rolled by the user.
        computer_roll (int): Value rolled by the computer.
    Returns:
        str: USER_WINS, COMPUTER_WINS or TIE.
    """
    if user_roll > computer_roll:
        return USER_WINS
    if user_roll < computer_roll:
        return COMPUTER_WINS
    return TIE
