
"""
config.py
Defines the GameConfig dataclass, which centralizes all rule options and policies for the fair dice engine.
Related modules:
- engine.py: Uses GameConfig to build dice, commitments and the turn arbiter.
- arbiter.py: Reads the dice-assignment policies.
"""

from dataclasses import dataclass
from typing import Optional

COMPUTER_FIRST_PICKS = ("random", "zero")
SECOND_PICKS = ("offset", "random_distinct")


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes all rule options for a fair dice game.
    Fields:
        min_dice (int): Minimum number of dice in the shared set.
        key_bytes (int): Length of each fresh secret key.
        hash_name (str): Digest used by the HMAC commitments.
        computer_first_pick (str): 'random' (uniform die) or 'zero' (always die 0) when the computer moves first.
        second_pick (str): 'offset' ((first + 1) % n) or 'random_distinct' (computer picks any other die).
        rng_seed (int|None): Seed for reproducible rolls and picks; None uses SystemRandom.
    """
    min_dice: int = 3
    key_bytes: int = 32
    hash_name: str = "sha3_256"
    computer_first_pick: str = "random"
    second_pick: str = "offset"
    # keys always come from secrets; the seed only affects rolls, picks and the coin flip
    rng_seed: Optional[int] = None
