"""
PowHash: the hashing side of the Hashlord proof-of-work game.

This module ties together:
  - Input composition ("<label>_<attempt>_Nonce_<nonce>")
  - SHA3-256 hex digests of the composed input
  - Difficulty checking against a leading-zero hex prefix

The composed input depends only on the session label, the attempt number
and the nonce, so a given (label, attempt, nonce) triple always reproduces
the same digest.
"""

import hashlib
import numbers
from typing import Iterable, List, Tuple

import numpy as np

from ..errors import InvalidArgument

DIGEST_HEX_LENGTH = 64


def coerce_int(value, name: str) -> int:
    """
    Return ``value`` as a plain int, rejecting bools and non-integers.

    numpy integer scalars are accepted so that nonces taken from an
    ``np.arange`` batch can be fed straight into a game.

    Raises:
        InvalidArgument: if ``value`` is not an integer
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    return int(value)


def hash_hex(data: str) -> str:
    """
    SHA3-256 of the UTF-8 encoding of ``data`` as 64 lowercase hex chars.

    Pure and total: every ``str`` (including the empty string) hashes.
    Lone surrogates are encoded as their raw 3-byte UTF-8 form.
    """
    return hashlib.sha3_256(data.encode("utf-8", "surrogatepass")).hexdigest()


def compose_input(label: str, attempt: int, nonce: int) -> str:
    """Build the string hashed for one attempt."""
    return f"{label}_{attempt}_Nonce_{nonce}"


def hash_attempt(label: str, attempt: int, nonce: int) -> str:
    """Digest for a single (attempt, nonce) pair of a session."""
    return hash_hex(compose_input(label, attempt, nonce))


def hash_batch(label: str, attempt: int, nonces: Iterable[int]) -> List[str]:
    """
    Digest a batch of nonces sharing one attempt number.

    Args:
        label: Session label
        attempt: Attempt number mixed into every input
        nonces: Iterable (typically an ``np.ndarray`` of uint64) of nonces

    Returns:
        List of hex digests, one per nonce, in input order
    """
    return [hash_attempt(label, attempt, int(n)) for n in np.asarray(nonces).ravel()]


class DifficultyTarget:
    """
    Leading-zero target for a difficulty level.

    A digest satisfies difficulty ``d`` iff its first ``d`` hex characters
    are all ``"0"``. There is no upper bound on ``d``; hosts that want a
    practical range clamp it before constructing the target.

    Usage:
        target = DifficultyTarget(3)
        found, digest = target.check_attempt("PVX_Block", 1, 42)
    """

    __slots__ = ('_difficulty', '_prefix')

    def __init__(self, difficulty: int):
        """
        Args:
            difficulty: Required number of leading zero hex characters (>= 1)

        Raises:
            InvalidArgument: if ``difficulty`` is not an integer >= 1
        """
        difficulty = coerce_int(difficulty, "difficulty")
        if difficulty < 1:
            raise InvalidArgument(f"difficulty must be >= 1, got {difficulty}")
        self._difficulty = difficulty
        self._prefix = "0" * difficulty

    @property
    def difficulty(self) -> int:
        return self._difficulty

    @property
    def prefix(self) -> str:
        """The required digest prefix, ``"0" * difficulty``."""
        return self._prefix

    def is_satisfied_by(self, digest: str) -> bool:
        """Check whether ``digest`` starts with the target prefix."""
        return digest.lower().startswith(self._prefix)

    @staticmethod
    def leading_zeros(digest: str) -> int:
        """Number of leading ``"0"`` hex characters in ``digest``."""
        return len(digest) - len(digest.lstrip("0"))

    def check_attempt(self, label: str, attempt: int, nonce: int) -> Tuple[bool, str]:
        """
        Hash one attempt and check it against the target.

        Returns:
            Tuple of (is_valid, digest)
        """
        digest = hash_attempt(label, attempt, nonce)
        return self.is_satisfied_by(digest), digest

    def __repr__(self) -> str:
        return f"DifficultyTarget({self._difficulty})"
