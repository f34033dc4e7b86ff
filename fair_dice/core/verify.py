
"""
verify.py
Defines the GameTranscript returned at the end of a game and the independent verifier for it.
The verifier only needs the transcript: it recomputes every HMAC from the revealed keys, re-reads each
rolled face from the dice, and re-derives the outcome.
Related modules:
- engine.py: Builds the GameTranscript when the keys are revealed.
- commitment.py: verify_commitment recomputes the digests.
- persistence/serializer.py: Saves transcripts as JSON.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from .commitment import DEFAULT_HASH, verify_commitment
from .dice import Die
from .errors import FairDiceError
from .rules import FIRST_MOVE_CODES, determine_outcome

FIRST_MOVE_LABEL = "first_move"
USER_ROLL_LABEL = "user_roll"
COMPUTER_ROLL_LABEL = "computer_roll"

# algorithms a transcript may declare; anything else is reported rather than recomputed
ACCEPTED_HASHES = (DEFAULT_HASH,)


@dataclass(frozen=True)
class CommitmentProof:
    """
    Everything a verifier needs for one commitment.
    Fields:
        label (str): first_move, user_roll or computer_roll.
        value (int): The committed value, disclosed after the commitment.
        digest (str): Hex HMAC published before the reveal.
        key_hex (str): The revealed key, hex encoded.
    """
    label: str
    value: int
    digest: str
    key_hex: str


@dataclass(frozen=True)
class RollRecord:
    party: str
    die_index: int
    face_index: int
    value: int


@dataclass(frozen=True)
class GameTranscript:
    """
    Plain result of a completed game: public disclosures plus revealed keys.
    """
    dice: Tuple[Tuple[int, ...], ...]
    first_mover: str
    user_die_index: int
    computer_die_index: int
    user_roll: RollRecord
    computer_roll: RollRecord
    proofs: Tuple[CommitmentProof, ...]
    hash_name: str
    outcome: str

    def proof(self, label: str) -> Optional[CommitmentProof]:
        for p in self.proofs:
            if p.label == label:
                return p
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameTranscript":
        return cls(
            dice=tuple(tuple(d) for d in data["dice"]),
            first_mover=data["first_mover"],
            user_die_index=data["user_die_index"],
            computer_die_index=data["computer_die_index"],
            user_roll=RollRecord(**data["user_roll"]),
            computer_roll=RollRecord(**data["computer_roll"]),
            proofs=tuple(CommitmentProof(**p) for p in data["proofs"]),
            hash_name=data["hash_name"],
            outcome=data["outcome"],
        )


def verify_proof(proof: CommitmentProof, hash_name: str = DEFAULT_HASH) -> bool:
    if hash_name not in ACCEPTED_HASHES:
        return False
    if not isinstance(proof.digest, str) or not isinstance(proof.key_hex, str):
        return False
    try:
        key = bytes.fromhex(proof.key_hex)
    except ValueError:
        return False
    return verify_commitment(proof.digest, key, proof.value, hash_name)


def _is_die_index(index: Any, dice_count: int) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < dice_count


def _check_roll(transcript: GameTranscript, roll: RollRecord, expected_die: int, label: str) -> List[str]:
    problems = []
    if roll.die_index != expected_die:
        problems.append(f"{label}: rolled die {roll.die_index} but was assigned die {expected_die}")
        return problems
    try:
        face = Die(transcript.dice[roll.die_index]).face_at(roll.face_index)
    except FairDiceError as e:
        problems.append(f"{label}: cannot recompute face ({e})")
        return problems
    if face != roll.value:
        problems.append(f"{label}: face {roll.face_index} of die {roll.die_index} is {face}, not {roll.value}")
    proof = transcript.proof(label)
    if proof is not None and proof.value != roll.value:
        problems.append(f"{label}: committed value {proof.value} differs from rolled value {roll.value}")
    return problems


def verify_transcript(transcript: GameTranscript) -> List[str]:
    """
    Independently verify a completed game. Malformed fields are reported, never raised.
    Args:
        transcript (GameTranscript): Transcript produced by GameEngine.reveal_keys().
    Returns:
        list[str]: Human-readable problems; empty when the game verifies.
    """
    problems: List[str] = []

    if transcript.hash_name not in ACCEPTED_HASHES:
        problems.append(f"hash: {transcript.hash_name!r} is not an accepted algorithm (expected {DEFAULT_HASH})")
    else:
        for label in (FIRST_MOVE_LABEL, USER_ROLL_LABEL, COMPUTER_ROLL_LABEL):
            proof = transcript.proof(label)
            if proof is None:
                problems.append(f"{label}: missing commitment proof")
            elif not verify_proof(proof, transcript.hash_name):
                problems.append(f"{label}: digest does not match revealed key and value")

    first = transcript.proof(FIRST_MOVE_LABEL)
    declared = transcript.first_mover if isinstance(transcript.first_mover, str) else None
    if first is not None and FIRST_MOVE_CODES.get(declared) != first.value:
        problems.append(f"first_move: committed {first.value} but declared {transcript.first_mover}")

    dice_count = len(transcript.dice)
    indices_ok = True
    for name, index in (("user", transcript.user_die_index), ("computer", transcript.computer_die_index)):
        if not _is_die_index(index, dice_count):
            problems.append(f"{name} die index {index!r} is not in [0, {dice_count})")
            indices_ok = False
    if not indices_ok:
        return problems

    if transcript.user_die_index == transcript.computer_die_index:
        problems.append("both parties were assigned the same die")

    problems.extend(_check_roll(transcript, transcript.user_roll, transcript.user_die_index, USER_ROLL_LABEL))
    problems.extend(_check_roll(transcript, transcript.computer_roll, transcript.computer_die_index, COMPUTER_ROLL_LABEL))

    rolls = (transcript.user_roll.value, transcript.computer_roll.value)
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in rolls):
        problems.append(f"outcome: rolls {rolls!r} are not integers")
        return problems
    expected = determine_outcome(*rolls)
    if expected != transcript.outcome:
        problems.append(f"outcome: declared {transcript.outcome} but rolls give {expected}")
    return problems
