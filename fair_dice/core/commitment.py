
"""
commitment.py
Keyed-MAC commitments for the fair dice protocol.
A party commits to a value by publishing HMAC(key, value) and later reveals the key so anyone can
recompute the digest and confirm the value was fixed before the reveal.
Related modules:
- engine.py: Creates one fresh Commitment per committed value (first move, user roll, computer roll).
- verify.py: Recomputes digests from revealed keys.
"""

import hmac
import math
import secrets
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import CommitmentError, InvalidInput

KEY_BYTES = 32
MIN_KEY_BYTES = 16
DEFAULT_HASH = "sha3_256"


def new_secret(num_bytes: int = KEY_BYTES) -> bytes:
    """
    Generate a fresh secret key from the operating system CSPRNG.
    Args:
        num_bytes (int): Key length in bytes (at least 16).
    Returns:
        bytes: Random key.
    Raises:
        InvalidInput: If num_bytes is below the minimum key length.
    """
    if not isinstance(num_bytes, int) or num_bytes < MIN_KEY_BYTES:
        raise InvalidInput(f"secret key must be at least {MIN_KEY_BYTES} bytes")
    return secrets.token_bytes(num_bytes)


def normalize_value(value: Any) -> int:
    """
    Coerce a committed value to int, rejecting anything that is not a finite integer.
    Integral floats (e.g. 4.0) are accepted and normalised so they commit identically to 4.
    """
    if isinstance(value, bool):
        raise InvalidInput("value must be an integer, not a bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    raise InvalidInput(f"value must be a finite integer, got {value!r}")


def commit(key: bytes, value: Any, hash_name: str = DEFAULT_HASH) -> str:
    """
    Compute the hex HMAC of the decimal string of value under key.
    Args:
        key (bytes): Secret key.
        value (int): Value being committed to.
        hash_name (str): hashlib algorithm name used as HMAC digest.
    Returns:
        str: Hex digest.
    Raises:
        InvalidInput: If value is not a finite integer.
    """
    message = str(normalize_value(value)).encode("utf-8")
    return hmac.new(key, message, hash_name).hexdigest()


def reveal(key: bytes) -> bytes:
    """Expose the key so a verifier can recompute the commitment."""
    return key


def verify_commitment(expected_digest: str, key: bytes, value: Any, hash_name: str = DEFAULT_HASH) -> bool:
    """
    Recompute commit(key, value) and compare it to the digest published before the reveal.
    Returns False (instead of raising) for malformed digests or keys, unknown hash names and values
    that cannot be committed to.
    """
    if not isinstance(expected_digest, str) or not expected_digest.isascii():
        return False
    if not isinstance(key, (bytes, bytearray)):
        return False
    try:
        computed = commit(key, value, hash_name)
    except (InvalidInput, ValueError, TypeError):
        return False
    return hmac.compare_digest(expected_digest.lower(), computed)


@dataclass
class Commitment:
    """
    One-shot commitment bound to a single value.
    Fields:
        label (str): What is being committed to (e.g. 'first_move', 'user_roll').
        key (bytes): Secret key, kept out of repr until revealed.
        hash_name (str): HMAC digest algorithm.
        value (int|None): Committed value, None before commit().
        digest (str|None): Published digest, None before commit().
        revealed (bool): True once the key has been disclosed.
    """
    label: str
    key: bytes = field(repr=False)
    hash_name: str = DEFAULT_HASH
    value: Optional[int] = None
    digest: Optional[str] = None
    revealed: bool = False

    @classmethod
    def fresh(cls, label: str, num_bytes: int = KEY_BYTES, hash_name: str = DEFAULT_HASH) -> "Commitment":
        return cls(label=label, key=new_secret(num_bytes), hash_name=hash_name)

    def commit(self, value: Any) -> str:
        """
        Bind this commitment to value and return the digest to publish.
        Raises:
            CommitmentError: If already committed or already revealed.
            InvalidInput: If value is not a finite integer.
        """
        if self.revealed:
            raise CommitmentError(f"{self.label}: key already revealed; create a fresh commitment")
        if self.digest is not None:
            raise CommitmentError(f"{self.label}: already committed; keys are never reused")
        normalized = normalize_value(value)
        self.digest = commit(self.key, normalized, self.hash_name)
        self.value = normalized
        return self.digest

    def reveal(self) -> bytes:
        if self.digest is None:
            raise CommitmentError(f"{self.label}: nothing committed yet")
        self.revealed = True
        return reveal(self.key)

    def key_hex(self) -> str:
        return self.key.hex()
