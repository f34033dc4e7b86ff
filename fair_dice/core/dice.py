
"""
dice.py
Defines the Die type and helpers to build a validated set of dice from user-supplied specs.
Related modules:
- engine.py: Builds the dice set and rolls the assigned dice.
- verify.py: Uses face_at to recompute a published roll from its face index.
"""

import random
from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import InsufficientDice, InvalidDieSpec, InvalidSelection

FACES_PER_DIE = 6

_default_rng = random.SystemRandom()


class Die:
    """
    An immutable die with exactly six non-negative integer faces.
    Faces may repeat and need not be 1..6 (non-transitive dice are the interesting case).
    """
    __slots__ = ("_faces",)

    def __init__(self, faces: Iterable[int]):
        try:
            values = tuple(faces)
        except TypeError:
            raise InvalidDieSpec(f"die faces must be a sequence, got {faces!r}") from None
        if len(values) != FACES_PER_DIE:
            raise InvalidDieSpec(f"each die must have exactly {FACES_PER_DIE} faces, got {len(values)}")
        for v in values:
            if isinstance(v, bool) or not isinstance(v, int):
                raise InvalidDieSpec(f"die faces must be integers, got {v!r}")
            if v < 0:
                raise InvalidDieSpec(f"die faces must be non-negative, got {v}")
        self._faces = values

    @property
    def faces(self) -> Tuple[int, ...]:
        return self._faces

    def face_at(self, index: int) -> int:
        """
        Deterministic lookup of a face by index.
        Args:
            index (int): Face index 0..5.
        Returns:
            int: Face value.
        Raises:
            InvalidSelection: If index is out of range.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not (0 <= index < FACES_PER_DIE):
            raise InvalidSelection(f"face index must be in [0, {FACES_PER_DIE}), got {index!r}")
        return self._faces[index]

    def roll_index(self, rng: Optional[random.Random] = None) -> int:
        """Pick a face index uniformly at random (non-deterministic unless a seeded rng is passed)."""
        rng = rng or _default_rng
        return rng.randrange(FACES_PER_DIE)

    def roll_random(self, rng: Optional[random.Random] = None) -> int:
        """
        Roll the die.
        Args:
            rng (random.Random|None): Source of randomness, defaults to SystemRandom.
        Returns:
            int: One of the six faces, each with probability 1/6.
        """
        return self._faces[self.roll_index(rng)]

    def mean(self) -> float:
        return sum(self._faces) / FACES_PER_DIE

    def __eq__(self, other) -> bool:
        return isinstance(other, Die) and self._faces == other._faces

    def __hash__(self) -> int:
        return hash(self._faces)

    def __repr__(self) -> str:
        return f"Die({list(self._faces)})"

    def __str__(self) -> str:
        return ",".join(str(f) for f in self._faces)


def parse_die_spec(text: str) -> Die:
    """
    Parse a comma-separated die spec such as "2,2,4,4,9,9".
    Raises:
        InvalidDieSpec: If any part is not an integer or the face count is wrong.
    """
    parts = [p.strip() for p in str(text).split(",")]
    faces = []
    for p in parts:
        try:
            faces.append(int(p))
        except ValueError:
            raise InvalidDieSpec(f"invalid die spec {text!r}: {p!r} is not an integer") from None
    return Die(faces)


def build_dice(specs: Sequence[Union[Die, str, Sequence[int]]], min_dice: int = 3) -> Tuple[Die, ...]:
    """
    Validate and build the shared dice set.
    Args:
        specs: Dice given as Die objects, comma-separated strings, or sequences of ints.
        min_dice (int): Minimum number of dice required.
    Returns:
        tuple[Die, ...]: The validated dice.
    Raises:
        InsufficientDice: If fewer than min_dice specs are given.
        InvalidDieSpec: If any spec is malformed.
    """
    specs = list(specs)
    if len(specs) < min_dice:
        raise InsufficientDice(f"at least {min_dice} dice are required, got {len(specs)}")
    dice = []
    for spec in specs:
        if isinstance(spec, Die):
            dice.append(spec)
        elif isinstance(spec, str):
            dice.append(parse_die_spec(spec))
        else:
            dice.append(Die(spec))
    return tuple(dice)
