"""Frame buffer and command stream for a 128x64 SSD1306 OLED panel."""

from __future__ import annotations

from typing import BinaryIO, Callable, Optional, TextIO, Union

from .bdf import BdfFont, BdfRenderer, read_buffer, read_file

I2C_ADDRESS = 0x3C
WIDTH = 128
HEIGHT = 64
PAGES = HEIGHT // 8

WRITE_CMD = 0x00
WRITE_DATA = 0x40

Transmit = Callable[[bytes], None]

_INIT_COMMANDS = (
    0xAE,  # panel off
    0x40,  # display start line 0
    0x81, 0xCF,  # contrast
    0xA1,  # segment remap
    0xC0,  # COM scan direction
    0xA6,  # normal display
    0xA8, 0x3F,  # multiplex ratio 1/64
    0xD5, 0x80,  # clock divide ratio / oscillator frequency
    0xD9, 0xF1,  # pre-charge period
    0xDA,  # COM pins hardware configuration
    0xDB, 0x40,  # VCOMH deselect level
    0x8D, 0x14,  # charge pump enabled
    0xA4,  # resume to RAM content
    0xA6,  # not inverted
)


def _uint8(value: int) -> int:
    return value & 0xFF


def _int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


class SSD1306:
    """An SSD1306 panel driven through a callable that sends one I2C frame."""

    def __init__(self, transmit: Transmit) -> None:
        self.transmit = transmit
        self.buffer = [bytearray(PAGES) for _ in range(WIDTH)]
        self.font: Optional[BdfFont] = None
        self.renderer: Optional[BdfRenderer] = None
        self.init()

    def _write_command(self, *payload: int) -> None:
        self.transmit(bytes((WRITE_CMD, *payload)))

    def init(self) -> None:
        """Send the power-up command sequence, blank the panel and turn it on."""
        for command in _INIT_COMMANDS:
            self._write_command(command)
        self._write_command(0x20, 1)  # vertical addressing mode
        self._write_command(0x21, 0, WIDTH - 1)  # column range
        self._write_command(0x22, 0, PAGES - 1)  # page range
        self.clear_screen(0x00)
        self.refresh_gram()
        self._write_command(0xAF)  # panel on

    def fill_point(self, x: int, y: int, on: int) -> None:
        """Set or clear one pixel; coordinates wrap as 8-bit values, off-panel ones are ignored."""
        x, y = _uint8(x), _uint8(y)
        if x >= WIDTH or y >= HEIGHT:
            return
        page = PAGES - 1 - y // 8
        mask = 1 << (7 - y % 8)
        if on:
            self.buffer[x][page] |= mask
        else:
            self.buffer[x][page] &= ~mask & 0xFF

    def fill_rectangle(self, x1: int, y1: int, x2: int, y2: int, on: int) -> None:
        """Set or clear every pixel from (x1, y1) to (x2, y2) inclusive."""
        x1, y1, x2, y2 = _uint8(x1), _uint8(y1), _uint8(x2), _uint8(y2)
        for x in range(x1, x2 + 1):
            for y in range(y1, y2 + 1):
                self.fill_point(x, y, on)

    def draw_bitmap(
        self, x: int, y: int, bitmap: Union[bytes, bytearray], width: int, height: int
    ) -> None:
        """Light the set pixels of a row-major, byte-padded 1-bit bitmap at (x, y)."""
        x, y, width, height = _uint8(x), _uint8(y), _uint8(width), _uint8(height)
        byte_width = (width + 7) // 8
        for row in range(height):
            for column in range(width):
                if bitmap[row * byte_width + column // 8] & (0x80 >> (column & 7)):
                    self.fill_point(x + column, y + row, 1)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Draw a line between two points, both ends included."""
        x1, y1, x2, y2 = _int16(x1), _int16(y1), _int16(x2), _int16(y2)
        x_len = _int16(abs(x1 - x2))
        y_len = _int16(abs(y1 - y2))

        if y_len < x_len:
            if x1 > x2:
                x1, x2, y1, y2 = x2, x1, y2, y1
            diff = y_len
            for _ in range(x_len + 1):
                if diff >= x_len:
                    diff -= x_len
                    y1 = _int16(y1 + 1 if y1 < y2 else y1 - 1)
                diff += y_len
                self.fill_point(x1, y1, 1)
                x1 = _int16(x1 + 1)
        else:
            if y1 > y2:
                x1, x2, y1, y2 = x2, x1, y2, y1
            diff = x_len
            for _ in range(y_len + 1):
                if diff >= y_len:
                    diff -= y_len
                    x1 = _int16(x1 + 1 if x1 < x2 else x1 - 1)
                diff += x_len
                self.fill_point(x1, y1, 1)
                y1 = _int16(y1 + 1)

    def _install_font(self, font: BdfFont, wrap: bool) -> None:
        self.font = font
        self.renderer = BdfRenderer(self.fill_point, WIDTH, HEIGHT, bool(wrap))

    def load_bdf_buffer(self, data: Union[bytes, bytearray, memoryview], wrap: bool) -> None:
        """Load the BDF font held in a bytes-like object for text drawing."""
        self._install_font(read_buffer(data), wrap)

    def load_bdf_file(self, stream: Union[BinaryIO, TextIO], wrap: bool) -> None:
        """Load the BDF font read from an open file for text drawing."""
        self._install_font(read_file(stream), wrap)

    def draw_bdf_text(self, x: int, y: int, string: str) -> None:
        """Draw a string with the loaded BDF font, its top-left at (x, y)."""
        if self.font is None or self.renderer is None:
            raise RuntimeError("no BDF font loaded")
        self.renderer.print_string(self.font, _uint8(x), _uint8(y), string)

    def refresh_gram(self) -> None:
        """Send the whole frame buffer to the panel."""
        self.transmit(bytes((WRITE_DATA,)) + b"".join(bytes(column) for column in self.buffer))

    def clear_screen(self, fill: int) -> None:
        """Set every byte of the frame buffer to the given fill value."""
        value = _uint8(fill)
        for column in self.buffer:
            column[:] = bytes((value,)) * PAGES