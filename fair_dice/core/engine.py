
"""
engine.py
Implements the GameEngine class, which sequences the commit-reveal protocol for one game and emits events.
Related modules:
- config.py: GameConfig is used to configure the engine.
- state.py: GameState and PartyState hold all game data.
- arbiter.py: Decides the first mover and assigns dice.
- commitment.py: One fresh Commitment per committed value.
- verify.py: GameTranscript is the final result value.
"""

import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .arbiter import TurnArbiter
from .commitment import Commitment
from .config import GameConfig
from .dice import build_dice
from .errors import IllegalPhaseError, InsufficientDice, InvalidSelection
from .rules import FIRST_MOVE_CODES, USER, determine_outcome
from .state import (
    ABORTED,
    COMPLETE,
    DICE_ASSIGNED,
    FIRST_MOVE_COMMITTED,
    INIT,
    REVEALED,
    ROLLS_COMMITTED,
    GameState,
    PartyState,
)
from .verify import (
    COMPUTER_ROLL_LABEL,
    FIRST_MOVE_LABEL,
    USER_ROLL_LABEL,
    CommitmentProof,
    GameTranscript,
    RollRecord,
)

# request_die_choice(low, high) -> die index chosen by the user
DieChooser = Callable[[int, int], int]


class GameEngine:
    """
    State machine for one provably fair dice game:
    INIT -> FIRST_MOVE_COMMITTED -> DICE_ASSIGNED -> ROLLS_COMMITTED -> REVEALED -> COMPLETE.
    The engine is single-use; any step called out of order raises IllegalPhaseError.
    """
    def __init__(self, dice: Sequence, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        """
        Initialize a new game. Dice are validated here, before any commitment exists.
        Args:
            dice: Dice specs (Die objects, "1,2,3,4,5,6" strings or sequences of ints).
            config (GameConfig|None): Game configuration, defaults to GameConfig().
            rng (random.Random|None): Source for the coin flip, picks and rolls. Overrides config.rng_seed.
        Raises:
            InsufficientDice: If fewer than config.min_dice dice are given.
            InvalidDieSpec: If a die spec is malformed.
        """
        self.config = config or GameConfig()
        dice_set = build_dice(dice, min_dice=self.config.min_dice)
        if rng is None:
            rng = random.Random(self.config.rng_seed) if self.config.rng_seed is not None else random.SystemRandom()
        self.rng = rng
        self.arbiter = TurnArbiter(
            rng=self.rng,
            computer_first_pick=self.config.computer_first_pick,
            second_pick=self.config.second_pick,
        )
        self.state = GameState(dice=dice_set)
        self._events: List[Dict] = []

    # Events are simple dicts, like the disclosures a console would print
    def _emit(self, event: Dict):
        self._events.append(event)

    def pop_events(self) -> List[Dict]:
        """
        Return and clear all emitted events since last call.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self) -> List[Dict]:
        return list(self._events)

    def _require(self, phase: str) -> None:
        if self.state.phase != phase:
            raise IllegalPhaseError(f"expected phase {phase}, engine is in {self.state.phase}")

    def _new_commitment(self, label: str) -> Commitment:
        return Commitment.fresh(label, num_bytes=self.config.key_bytes, hash_name=self.config.hash_name)

    @property
    def phase(self) -> str:
        return self.state.phase

    @property
    def dice_count(self) -> int:
        return len(self.state.dice)

    def get_view(self) -> Dict:
        """
        Public, non-secret view of the game, for die choosers and renderers.
        Returns:
            dict: dice, phase, first mover (once committed) and selection bounds.
        """
        return {
            "dice": self.state.dice,
            "phase": self.state.phase,
            "first_mover": self.state.first_mover,
            "low": 0,
            "high": self.dice_count - 1,
            "config": self.config,
        }

    def commit_first_move(self) -> str:
        """
        Flip the coin for the first mover and commit to it. Only the digest is disclosed.
        Returns:
            str: Hex digest of the first-move commitment.
        """
        self._require(INIT)
        first_mover = self.arbiter.decide_first_mover()
        commitment = self._new_commitment(FIRST_MOVE_LABEL)
        digest = commitment.commit(FIRST_MOVE_CODES[first_mover])
        self.state.first_mover = first_mover
        self.state.first_move_commitment = commitment
        self.state.phase = FIRST_MOVE_COMMITTED
        self._emit({"type": "FirstMoveCommitted", "digest": digest})
        return digest

    def assign_dice(self, request_die_choice: Optional[DieChooser] = None) -> Tuple[int, int]:
        """
        Resolve which die each party plays with. When the user moves first, request_die_choice(low, high)
        is called once; an invalid answer aborts the game.
        Args:
            request_die_choice (callable|None): Synchronous collaborator returning the user's die index.
        Returns:
            tuple[int, int]: (user_die_index, computer_die_index).
        Raises:
            InvalidSelection: If the user's choice is missing or out of range (engine moves to ABORTED).
            Exception: Anything raised by request_die_choice is re-raised after the engine moves to ABORTED.
        """
        self._require(FIRST_MOVE_COMMITTED)
        requested = None
        if self.state.first_mover == USER:
            if request_die_choice is None:
                self._abort("user moves first but no die chooser was supplied")
                raise InvalidSelection("user moves first but no die chooser was supplied")
            try:
                requested = request_die_choice(0, self.dice_count - 1)
            except Exception as e:
                self._abort(f"die chooser failed: {e!r}")
                raise
        try:
            user_index, computer_index = self.arbiter.assign_dice(self.state.first_mover, requested, self.dice_count)
        except (InvalidSelection, InsufficientDice) as e:
            self._abort(str(e))
            raise
        self.state.user = PartyState(die_index=user_index)
        self.state.computer = PartyState(die_index=computer_index)
        self.state.phase = DICE_ASSIGNED
        self._emit({
            "type": "DiceAssigned",
            "first_mover": self.state.first_mover,
            "user_die": user_index,
            "computer_die": computer_index,
        })
        return user_index, computer_index

    def _roll_and_commit(self, party: PartyState, label: str) -> str:
        die = self.state.dice[party.die_index]
        party.face_index = die.roll_index(self.rng)
        party.roll = die.face_at(party.face_index)
        party.commitment = self._new_commitment(label)
        return party.commitment.commit(party.roll)

    def commit_rolls(self) -> Tuple[str, str]:
        """
        Roll both assigned dice independently and commit to each value with its own fresh key.
        Returns:
            tuple[str, str]: (user_digest, computer_digest).
        """
        self._require(DICE_ASSIGNED)
        user_digest = self._roll_and_commit(self.state.user, USER_ROLL_LABEL)
        computer_digest = self._roll_and_commit(self.state.computer, COMPUTER_ROLL_LABEL)
        self.state.phase = ROLLS_COMMITTED
        self._emit({"type": "RollsCommitted", "user_digest": user_digest, "computer_digest": computer_digest})
        return user_digest, computer_digest

    def reveal_rolls(self) -> Tuple[int, int]:
        """
        Disclose both rolled values in plaintext.
        """
        self._require(ROLLS_COMMITTED)
        self.state.phase = REVEALED
        user_roll, computer_roll = self.state.user.roll, self.state.computer.roll
        self._emit({"type": "RollsRevealed", "user_roll": user_roll, "computer_roll": computer_roll})
        return user_roll, computer_roll

    def reveal_keys(self) -> GameTranscript:
        """
        Disclose every secret key, determine the winner and finish the game.
        Returns:
            GameTranscript: Everything needed to verify the game independently.
        """
        self._require(REVEALED)
        user, computer = self.state.user, self.state.computer
        commitments = (self.state.first_move_commitment, user.commitment, computer.commitment)
        proofs = []
        for c in commitments:
            c.reveal()
            proofs.append(CommitmentProof(label=c.label, value=c.value, digest=c.digest, key_hex=c.key_hex()))
        self.state.outcome = determine_outcome(user.roll, computer.roll)
        self.state.phase = COMPLETE
        self._emit({"type": "KeysRevealed", "keys": {p.label: p.key_hex for p in proofs}, "outcome": self.state.outcome})
        return GameTranscript(
            dice=tuple(d.faces for d in self.state.dice),
            first_mover=self.state.first_mover,
            user_die_index=user.die_index,
            computer_die_index=computer.die_index,
            user_roll=RollRecord("USER", user.die_index, user.face_index, user.roll),
            computer_roll=RollRecord("COMPUTER", computer.die_index, computer.face_index, computer.roll),
            proofs=tuple(proofs),
            hash_name=self.config.hash_name,
            outcome=self.state.outcome,
        )

    def play(self, request_die_choice: Optional[DieChooser] = None) -> GameTranscript:
        """
        Run the whole protocol in order and return the transcript.
        """
        self.commit_first_move()
        self.assign_dice(request_die_choice)
        self.commit_rolls()
        self.reveal_rolls()
        return self.reveal_keys()

    def _abort(self, reason: str) -> None:
        self.state.phase = ABORTED
        self._emit({"type": "GameAborted", "reason": reason})

    def is_terminal(self) -> bool:
        """
        Returns True once the game is complete or aborted.
        """
        return self.state.phase in (COMPLETE, ABORTED)
