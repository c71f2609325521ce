# ssd1306bdf

A frame buffer for 128×64 SSD1306 OLED panels, with a reader and renderer for
BDF bitmap fonts. It is pure Python and has no dependencies.

The package does no bus I/O itself. You give it a `transmit` callable, and the
package calls it once for each packet it sends to the panel. Each packet is a
`bytes` object that starts with a control byte: `0x00` for commands and `0x40`
for display data. The callable could perform an I2C write to address `0x3C`,
forward the packet over a serial bridge, or record it in a test.

## Installation

```
pip install ssd1306bdf
```

## Drawing on the panel

```python
from ssd1306bdf.ssd1306 import SSD1306

def transmit(packet: bytes) -> None:
    bus.write(0x3C, packet)        # your I2C write goes here

display = SSD1306(transmit)        # sends the power-up sequence and a blank frame

display.draw_line(0, 0, 127, 63)
display.fill_rectangle(10, 10, 20, 20, True)
display.fill_point(64, 32, True)
display.draw_bitmap(100, 0, bytes([0xFF, 0x81, 0x81, 0xFF]), 8, 4)

display.refresh_gram()             # pushes the whole frame buffer to the panel
```

- Constructing an `SSD1306` calls `init()`. That sends the initialisation commands and sets vertical addressing over columns 0–127 and pages 0–7. It then clears the frame buffer, sends the frame, and turns the panel on. You can call `init()` again later to repeat the sequence.
- `fill_point(x, y, on)` sets or clears one pixel.
  - Coordinates are taken as 8-bit values, so they wrap modulo 256.
  - Points that land outside 128×64 after wrapping are ignored.
- `fill_rectangle(x1, y1, x2, y2, on)` sets or clears every pixel from `(x1, y1)` to `(x2, y2)`, both corners included.
- `draw_bitmap(x, y, bitmap, width, height)` lights the set pixels of a 1-bit bitmap. The bitmap is stored row by row, most significant bit first, and each row is padded to a whole byte. Clear bits leave the frame buffer unchanged.
- `draw_line(x1, y1, x2, y2)` draws a line that includes both end points.
- `clear_screen(fill)` sets every byte of the frame buffer to `fill`.
- `refresh_gram()` sends the frame buffer as a single data packet. The buffer is 128 columns of 8 bytes each.

The frame buffer is the `buffer` attribute: a list of 128 `bytearray` columns, one per x position, each holding 8 bytes.

## Text with BDF fonts

```python
with open("font.bdf", "rb") as stream:
    display.load_bdf_file(stream, wrap=True)

display.draw_bdf_text(0, 0, "Hello\nworld")
display.refresh_gram()
```

- `load_bdf_buffer(data, wrap)` loads the font from a bytes-like object.
- `load_bdf_file(stream, wrap)` reads the font from an open file, starting at the beginning of the file.
- `draw_bdf_text` raises `RuntimeError` if no font has been loaded.

## Using the BDF reader directly

```python
from ssd1306bdf.bdf import BdfRenderer, read_path

font = read_path("font.bdf")
print(font.info.name, font.info.point_size, len(font.glyphs))

glyph = font.find_glyph(ord("A"))   # first glyph with that encoding, or None

pixels = {}
renderer = BdfRenderer(lambda x, y, on: pixels.__setitem__((x, y), on),
                       width=128, height=64, wrap=False)
renderer.print_string(font, 0, 0, "AB")
print(renderer.current_x, renderer.current_y)
```

Ways to read a font:

- `read_buffer(data)` reads a font from bytes.
- `read_string(text)` reads a font from a `str`. A NUL character ends the input.
- `read_file(stream)` reads a font from an open binary or text stream, after seeking to its start.
- `read_path(path)` reads a font from a file path.

The parsed font is a `BdfFont`:

- `info` is a `FontInfo` with the name, point size, resolution, a `BoundingBox`, `Metrics` and the glyph count.
- `glyphs` is a list of `Glyph` objects. Each glyph has a name, an encoding, a bounding box, metrics and packed `bitmap` bytes.
- Each glyph starts with the font-wide bounding box and metrics. Any values the glyph sets itself replace them.

Parsing is lenient. Unknown keywords and values that cannot be read are skipped, and parsing stops at `ENDFONT`.

How `BdfRenderer` draws:

- It draws nothing unless it has a `draw` callable and both `width` and `height` are greater than 0.
- For every pixel of a glyph's byte-padded cell, it calls `draw(x, y, lit)`, with `lit` set to 1 or 0.
- After each character it stores the pen position in `current_x` and `current_y`. The pen moves right by the glyph's `dwx0`.
- A newline moves the pen to column 0 and down by the height of the font's bounding box.
- With `wrap` on, a glyph that would reach the right edge starts on a new line.
- A character whose encoding is not in the font draws nothing and does not move the pen.

## What it does not do

The package does not open or drive any bus, and it does not find or talk to devices itself. All output goes through the `transmit` callable you supply. It cannot read anything back from the panel. It has no command-line program.

## Running the tests

```
pip install ssd1306bdf[test]
pytest
```