
"""
state.py
Defines the game state dataclasses for the fair dice engine: PartyState and GameState.
Related modules:
- engine.py: Owns and mutates the single GameState of a game.
- commitment.py: Commitment objects are stored per party and for the first move.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .commitment import Commitment
from .dice import Die

INIT = "INIT"
FIRST_MOVE_COMMITTED = "FIRST_MOVE_COMMITTED"
DICE_ASSIGNED = "DICE_ASSIGNED"
ROLLS_COMMITTED = "ROLLS_COMMITTED"
REVEALED = "REVEALED"
COMPLETE = "COMPLETE"
ABORTED = "ABORTED"


@dataclass
class PartyState:
    """
    Stores one party's assignment and roll.
    Fields:
        die_index (int|None): Index into the shared dice set.
        face_index (int|None): Face rolled on that die.
        roll (int|None): Value rolled (kept secret until reveal_rolls).
        commitment (Commitment|None): Commitment to the roll.
    """
    die_index: Optional[int] = None
    face_index: Optional[int] = None
    roll: Optional[int] = None
    commitment: Optional[Commitment] = None


@dataclass
class GameState:
    """
    Composite state for one game.
    Fields:
        dice (tuple[Die, ...]): Shared dice set.
        phase (str): Current phase (INIT through COMPLETE, or ABORTED).
        first_mover (str|None): USER or COMPUTER once decided.
        first_move_commitment (Commitment|None): Commitment to the first-mover code.
        user (PartyState): User's assignment and roll.
        computer (PartyState): Computer's assignment and roll.
        outcome (str|None): USER_WINS, COMPUTER_WINS or TIE once complete.
    """
    dice: Tuple[Die, ...]
    phase: str = INIT
    first_mover: Optional[str] = None
    first_move_commitment: Optional[Commitment] = None
    user: PartyState = field(default_factory=PartyState)
    computer: PartyState = field(default_factory=PartyState)
    outcome: Optional[str] = None
