"""Reading BDF bitmap fonts and rendering text through a pixel callback."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Iterator, Optional, TextIO, Union

FIELD_LENGTH = 4096
GLYPH_NAME_LENGTH = 64
_LINE_LIMIT = 0x1000 - 1

_INT_RE = re.compile(rb"\s*([+-]?\d+)")
_HEX_RE = re.compile(rb"\s*([+-]?(?:0[xX])?[0-9a-fA-F]+)")

DrawFunction = Callable[[int, int, int], None]


@dataclass
class BoundingBox:
    """Width, height and offsets of a glyph or of the whole font."""

    w: int = 0
    h: int = 0
    x_off: int = 0
    y_off: int = 0


@dataclass
class Metrics:
    """Scalable, device and vertical widths of a glyph or font."""

    swx0: int = 0
    swy0: int = 0
    swx1: int = 0
    swy1: int = 0
    dwx0: int = 0
    dwy0: int = 0
    dwx1: int = 0
    dwy1: int = 0
    v_x_off: int = 0
    v_y_off: int = 0


@dataclass
class FontInfo:
    """Global properties taken from the font header."""

    name: str = ""
    point_size: int = 0
    x_res: int = 0
    y_res: int = 0
    bbox: BoundingBox = field(default_factory=BoundingBox)
    metrics: Metrics = field(default_factory=Metrics)
    chars: int = 0


@dataclass
class Glyph:
    """One character: its encoding, geometry and packed bitmap rows."""

    name: str = ""
    encoding: int = 0
    bbox: BoundingBox = field(default_factory=BoundingBox)
    metrics: Metrics = field(default_factory=Metrics)
    bitmap: bytes = b""


@dataclass
class BdfFont:
    """A parsed BDF font."""

    info: FontInfo = field(default_factory=FontInfo)
    glyphs: list[Glyph] = field(default_factory=list)

    def find_glyph(self, encoding: int) -> Optional[Glyph]:
        """Return the first glyph with the given encoding, or None."""
        return next((g for g in self.glyphs if g.encoding == encoding), None)


_BBOX_FIELDS = ("w", "h", "x_off", "y_off")
_METRIC_FIELDS = {
    "SWIDTH": ("swx0", "swy0"),
    "DWIDTH": ("dwx0", "dwy0"),
    "SWIDTH1": ("swx1", "swy1"),
    "DWIDTH1": ("dwx1", "dwy1"),
    "VVECTOR": ("v_x_off", "v_y_off"),
}


def _parse_int(token: bytes, current: int) -> int:
    match = _INT_RE.match(token)
    return int(match.group(1)) if match else current


def _set_field(target: object, names: tuple[str, ...], element: int, token: bytes) -> None:
    if 1 <= element <= len(names):
        name = names[element - 1]
        setattr(target, name, _parse_int(token, getattr(target, name)))


def _decode(token: bytes, limit: int) -> str:
    return token[: limit - 1].decode("utf-8", errors="replace")


def _lines(data: bytes) -> Iterator[bytes]:
    """Yield the meaningful text of each line, as the reader sees it."""
    pos, length = 0, len(data)
    while pos < length:
        end = min(length, pos + _LINE_LIMIT)
        newline = data.find(b"\n", pos, end)
        if newline != -1:
            end = newline + 1
        nul = data.find(b"\0", pos + 1, end)
        if nul != -1:
            end = nul
        chunk = data[pos:end]
        pos = end
        cut = len(chunk)
        for stop in (b"\0", b"\r", b"\n"):
            index = chunk.find(stop)
            if index != -1:
                cut = min(cut, index)
        yield chunk[:cut]


def _apply_header(font: BdfFont, command: str, element: int, token: bytes) -> None:
    info = font.info
    if command == "FONT":
        if element == 1:
            info.name = _decode(token, FIELD_LENGTH)
    elif command == "SIZE":
        _set_field(info, ("point_size", "x_res", "y_res"), element, token)
    elif command == "FONTBOUNDINGBOX":
        _set_field(info.bbox, _BBOX_FIELDS, element, token)
    elif command in _METRIC_FIELDS:
        _set_field(info.metrics, _METRIC_FIELDS[command], element, token)
    elif command == "CHARS" and element == 1:
        info.chars = _parse_int(token, info.chars)
        font.glyphs = [
            Glyph(bbox=dataclasses.replace(info.bbox), metrics=dataclasses.replace(info.metrics))
            for _ in range(max(info.chars, 0))
        ]


def read_buffer(data: Union[bytes, bytearray, memoryview]) -> BdfFont:
    """Parse BDF font data held in a bytes-like object."""
    data = bytes(data)
    font = BdfFont()
    index = 0
    in_bitmap = False
    bitmap_size = 0
    bitmap_pos = 0
    last_hex = 0
    buffers: dict[int, bytearray] = {}
    ended = False

    for line in _lines(data):
        tokens = [t for t in line.split(b" ") if t]
        if not tokens:
            continue
        command = tokens[0].decode("latin-1").upper()
        for element, token in enumerate(tokens):
            if font.info.chars == 0:
                _apply_header(font, command, element, token)
                continue
            if font.info.chars < 0:
                continue
            glyph = font.glyphs[index] if index < len(font.glyphs) else None
            if command == "STARTCHAR":
                if element == 1:
                    if glyph is not None:
                        glyph.name = _decode(token, GLYPH_NAME_LENGTH)
                    in_bitmap = False
            elif command == "ENCODING":
                if element == 1 and glyph is not None:
                    glyph.encoding = _parse_int(token, glyph.encoding)
            elif command == "BBX":
                if glyph is not None:
                    _set_field(glyph.bbox, _BBOX_FIELDS, element, token)
            elif command in _METRIC_FIELDS:
                if glyph is not None:
                    _set_field(glyph.metrics, _METRIC_FIELDS[command], element, token)
            elif command == "BITMAP":
                if glyph is not None:
                    row_bytes = (glyph.bbox.w + 7) // 8 if glyph.bbox.w & 7 else glyph.bbox.w // 8
                    bitmap_size = max(glyph.bbox.h * row_bytes, 0)
                    buffers[index] = bytearray(bitmap_size)
                bitmap_pos = 0
                in_bitmap = True
            elif command == "ENDCHAR":
                index += 1
            elif command == "ENDFONT":
                ended = True
            elif in_bitmap:
                buffer = buffers.get(index)
                for start in range(0, len(token), 2):
                    match = _HEX_RE.match(token[start : start + 2])
                    if match:
                        last_hex = int(match.group(1), 16) & 0xFF
                    if buffer is not None and bitmap_pos < min(bitmap_size, len(buffer)):
                        buffer[bitmap_pos] = last_hex
                        bitmap_pos += 1
        if ended:
            break

    for position, buffer in buffers.items():
        font.glyphs[position].bitmap = bytes(buffer)
    return font


def read_string(text: str) -> BdfFont:
    """Parse BDF font data from a string; a NUL character ends the data."""
    return read_buffer(text.split("\0", 1)[0].encode("utf-8"))


def read_file(stream: Union[BinaryIO, TextIO]) -> BdfFont:
    """Parse BDF font data from an open file, starting at its beginning."""
    stream.seek(0)
    content = stream.read()
    if isinstance(content, str):
        content = content.encode("utf-8")
    return read_buffer(content)


def read_path(path: Union[str, os.PathLike]) -> BdfFont:
    """Parse the BDF font file at the given path."""
    with open(path, "rb") as stream:
        return read_file(stream)


class BdfRenderer:
    """Draws text with a BDF font by calling draw(x, y, lit) for every pixel."""

    def __init__(
        self,
        draw: Optional[DrawFunction] = None,
        width: int = 0,
        height: int = 0,
        wrap: bool = False,
    ) -> None:
        self.draw = draw
        self.width = width
        self.height = height
        self.wrap = wrap
        self.current_x = 0
        self.current_y = 0

    def print_character(self, font: BdfFont, x: int, y: int, character: Union[int, str]) -> None:
        """Draw one character at (x, y) and advance the current position."""
        if self.draw is None or self.width <= 0 or self.height <= 0:
            return
        code = ord(character) if isinstance(character, str) else character
        font_h = font.info.bbox.h
        font_y_off = font.info.bbox.y_off

        if code == ord("\n"):
            x = 0
            y += font_h

        glyph = font.find_glyph(code)
        if glyph is not None:
            box = glyph.bbox
            if self.wrap and x + box.x_off + box.w >= self.width:
                x = 0
                y += font_h
            padded_w = (box.w | 7) + 1 if box.w & 7 else box.w
            top = y + (font_h - box.h) + font_y_off - box.y_off
            bitmap = glyph.bitmap
            count = 0
            for row in range(box.h):
                for column in range(padded_w):
                    byte = bitmap[count // 8] if count // 8 < len(bitmap) else 0
                    lit = 1 if byte & (0x80 >> (count % 8)) else 0
                    self.draw(x + box.x_off + column, top + row, lit)
                    count += 1
            x += glyph.metrics.dwx0

        self.current_x = x
        self.current_y = y

    def print_string(self, font: BdfFont, x: int, y: int, string: str) -> None:
        """Draw a string starting at (x, y), one character after another."""
        for character in string:
            self.print_character(font, x, y, character)
            x, y = self.current_x, self.current_y