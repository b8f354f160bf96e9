"""Word-level primitives for the storage record formats.

Records are sequences of 16-bit words. Each word is stored as one character
whose code point is the word value, so a record is a plain ``str``.
"""

from dataclasses import dataclass

WORD_MASK = 0xFFFF


class RecordDecodeError(ValueError):
    """Raised when a stored buffer cannot be parsed as a complete record."""


def pack_words(*words: int) -> str:
    """Pack integer words into record text."""
    for word in words:
        if not 0 <= word <= WORD_MASK:
            raise ValueError(f"word out of range: {word}")
    return "".join(chr(word) for word in words)


@dataclass
class WordCursor:
    """Sequential reader over record text."""

    text: str
    offset: int = 0

    @property
    def remaining(self) -> int:
        return len(self.text) - self.offset

    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def read_word(self) -> int:
        """Return the next word and advance."""
        if self.at_end():
            raise RecordDecodeError(f"unexpected end of data at word {self.offset}")
        word = ord(self.text[self.offset])
        if word > WORD_MASK:
            raise RecordDecodeError(f"character at word {self.offset} is not 16-bit")
        self.offset += 1
        return word

    def read_text(self, length: int) -> str:
        """Return the next ``length`` characters verbatim and advance."""
        if length > self.remaining:
            raise RecordDecodeError(
                f"expected {length} characters at word {self.offset}, "
                f"found {self.remaining}"
            )
        value = self.text[self.offset : self.offset + length]
        self.offset += length
        return value


def to_code_units(text: str) -> str:
    """Return ``text`` with one character per UTF-16 code unit.

    Characters outside the Basic Multilingual Plane become surrogate pairs, so
    the result's length is its size in 16-bit words.
    """
    raw = text.encode("utf-16-le", "surrogatepass")
    return "".join(
        chr(int.from_bytes(raw[i : i + 2], "little")) for i in range(0, len(raw), 2)
    )


def from_code_units(units: str) -> str:
    """Join surrogate pairs produced by :func:`to_code_units` back into characters."""
    raw = b"".join(ord(unit).to_bytes(2, "little") for unit in units)
    return raw.decode("utf-16-le", "surrogatepass")
