"""Source text with byte <-> character offset maps.

tree-sitter reports UTF-8 byte offsets; every region the engine emits is a
character offset into the Python ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceText:
    """Document text plus its UTF-8 encoding and offset maps."""

    text: str
    encoded: bytes
    byte_to_char: tuple[int, ...] | None
    char_to_byte: tuple[int, ...] | None

    def __post_init__(self) -> None:
        if self.byte_to_char is not None and len(self.byte_to_char) != len(self.encoded) + 1:
            raise ValueError("byte_to_char length must equal len(encoded) + 1")
        if self.char_to_byte is not None and len(self.char_to_byte) != len(self.text) + 1:
            raise ValueError("char_to_byte length must equal len(text) + 1")

    @property
    def is_ascii(self) -> bool:
        return self.byte_to_char is None

    def char_offset(self, byte_offset: int) -> int:
        if self.byte_to_char is None:
            return byte_offset
        return self.byte_to_char[byte_offset]

    def byte_offset(self, char_offset: int) -> int:
        if self.char_to_byte is None:
            return char_offset
        return self.char_to_byte[char_offset]


def build_source_text(text: str) -> SourceText:
    """Encode text and build offset maps (identity maps are elided for ASCII)."""

    encoded = text.encode("utf-8", "surrogatepass")
    if len(encoded) == len(text):
        return SourceText(text=text, encoded=encoded, byte_to_char=None, char_to_byte=None)

    byte_to_char = [0] * (len(encoded) + 1)
    char_to_byte = [0] * (len(text) + 1)
    byte_idx = 0
    for char_idx, ch in enumerate(text):
        width = len(ch.encode("utf-8", "surrogatepass"))
        char_to_byte[char_idx] = byte_idx
        for offset in range(width):
            byte_to_char[byte_idx + offset] = char_idx
        byte_idx += width
    byte_to_char[len(encoded)] = len(text)
    char_to_byte[len(text)] = len(encoded)

    return SourceText(
        text=text,
        encoded=encoded,
        byte_to_char=tuple(byte_to_char),
        char_to_byte=tuple(char_to_byte),
    )
