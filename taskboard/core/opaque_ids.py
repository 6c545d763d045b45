"""Reversible opaque tokens for integer primary keys.

Tokens are produced by the hashids algorithm with a process-wide salt and a
minimum length. They hide sequential database keys from API clients; they are
not signed and must never be treated as proof of authorization.
"""

from __future__ import annotations

import re
from functools import lru_cache

from hashids import Hashids

from taskboard.core.config import settings

ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890"
TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

INVALID_ID_FORMAT = "Invalid ID format"
CORRUPTED_ID = "Invalid or corrupted ID"


class InvalidTokenError(ValueError):
    """Raised when a token contains characters outside the codec alphabet."""


class OpaqueIdError(ValueError):
    """Base error for inbound identifiers that cannot be resolved."""


class InvalidIdFormatError(OpaqueIdError):
    """Inbound identifier is not a non-empty alphanumeric string."""

    def __init__(self) -> None:
        super().__init__(INVALID_ID_FORMAT)


class CorruptedIdError(OpaqueIdError):
    """Inbound identifier is well-formed but was not issued by this codec."""

    def __init__(self) -> None:
        super().__init__(CORRUPTED_ID)


class OpaqueIdCodec:
    """Encode non-negative integers to tokens and decode them back."""

    def __init__(self, *, salt: str, min_length: int = 8, alphabet: str = ALPHABET) -> None:
        self.min_length = min_length
        self.alphabet = alphabet
        self._alphabet_chars = frozenset(alphabet)
        self._hashids = Hashids(salt=salt, min_length=min_length, alphabet=alphabet)

    def encode(self, *numbers: int) -> str:
        """Return the token for one or more non-negative integers."""
        if not numbers:
            msg = "at least one number is required"
            raise ValueError(msg)
        for number in numbers:
            if isinstance(number, bool) or not isinstance(number, int) or number < 0:
                msg = f"cannot encode {number!r}: expected a non-negative integer"
                raise ValueError(msg)
        return self._hashids.encode(*numbers)

    def decode(self, token: str) -> tuple[int, ...]:
        """Return the integers behind ``token``.

        An empty tuple means the token is well-formed but unknown to this
        configuration (different salt, truncated, tampered).
        """
        if not token:
            return ()
        stray = sorted(set(token) - self._alphabet_chars)
        if stray:
            msg = f"token contains characters outside the alphabet: {''.join(stray)!r}"
            raise InvalidTokenError(msg)
        return tuple(self._hashids.decode(token))

    def decode_id(self, value: object) -> int:
        """Resolve an inbound identifier to its integer key.

        Raises ``InvalidIdFormatError`` unless ``value`` is a non-empty
        alphanumeric string, and ``CorruptedIdError`` when it decodes to
        nothing.
        """
        if not isinstance(value, str) or not TOKEN_PATTERN.match(value):
            raise InvalidIdFormatError
        try:
            numbers = self.decode(value)
        except InvalidTokenError as exc:
            raise InvalidIdFormatError from exc
        if not numbers:
            raise CorruptedIdError
        return numbers[0]


@lru_cache(maxsize=1)
def get_id_codec() -> OpaqueIdCodec:
    """Return the process-wide codec built from settings."""
    return OpaqueIdCodec(
        salt=settings.hashids_salt,
        min_length=settings.hashids_min_length,
    )
