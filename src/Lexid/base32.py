"""Crockford Base32 codec for 128-bit identifiers.

The 16 bytes are read as one big-endian unsigned integer and split into 26
five-bit symbols, most significant first. 26 * 5 = 130, so the leading symbol
only carries the top 3 bits and can never exceed ``7`` in canonical text.

Alphabet: 0123456789ABCDEFGHJKMNPQRSTVWXYZ (no I, L, O, U).
"""

from __future__ import annotations

from typing import Final

from Lexid.errors import FormatError, LengthError

ALPHABET: Final[str] = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ENCODED_LENGTH: Final[int] = 26
DECODED_LENGTH: Final[int] = 16

# Lowercase input is accepted; keys are ASCII only so no Unicode case folding
# can map a foreign character onto the alphabet.
_DECODE: Final[dict[str, int]] = {
    **{ch: i for i, ch in enumerate(ALPHABET)},
    **{ch.lower(): i for i, ch in enumerate(ALPHABET)},
}
_LEADING: Final[frozenset[str]] = frozenset(ALPHABET[:8])
_VALUE_BITS: Final[int] = DECODED_LENGTH * 8


def _encode_int(value: int, length: int) -> str:
    chars: list[str] = []
    for _ in range(length):
        value, rem = divmod(value, 32)
        chars.append(ALPHABET[rem])
    chars.reverse()
    return "".join(chars)


def encode_base32(data: bytes) -> str:
    """Encode exactly 16 bytes as 26 uppercase Base32 characters.

    Raises:
        LengthError: If ``data`` is not 16 bytes long.
    """
    if len(data) != DECODED_LENGTH:
        raise LengthError(f"Expected {DECODED_LENGTH} bytes, got {len(data)}.")
    return _encode_int(int.from_bytes(data, "big"), ENCODED_LENGTH)


def decode_base32(text: str) -> bytes:
    """Decode 26 Base32 characters back into 16 bytes.

    Lookup is case-insensitive. Any unknown character fails the whole call;
    no partial result is ever returned.

    Raises:
        FormatError: On wrong length, a character outside the alphabet, or a
            leading symbol that would need more than 128 bits.
    """
    if not isinstance(text, str):
        raise FormatError(f"Expected str, got {type(text).__name__}.")
    if len(text) != ENCODED_LENGTH:
        raise FormatError(f"Expected {ENCODED_LENGTH} characters, got {len(text)}.")
    value = 0
    for pos, ch in enumerate(text):
        digit = _DECODE.get(ch)
        if digit is None:
            raise FormatError(f"Invalid character {ch!r} at position {pos}.")
        value = (value << 5) | digit
    if value >> _VALUE_BITS:
        raise FormatError(f"Leading character {text[0]!r} overflows 128 bits.")
    return value.to_bytes(DECODED_LENGTH, "big")


def is_canonical(text: str) -> bool:
    """Return True if ``text`` is canonical (uppercase, 26 chars, fits 128 bits)."""
    if not isinstance(text, str) or len(text) != ENCODED_LENGTH:
        return False
    if text[0] not in _LEADING:
        return False
    for ch in text:
        if ch not in ALPHABET:
            return False
    return True


__all__ = [
    "ALPHABET",
    "DECODED_LENGTH",
    "ENCODED_LENGTH",
    "decode_base32",
    "encode_base32",
    "is_canonical",
]
