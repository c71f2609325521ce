import io

import pytest

from ssd1306bdf.ssd1306 import SSD1306

FONT = b"""STARTFONT 2.1
FONT test
SIZE 8 75 75
FONTBOUNDINGBOX 8 2 0 0
CHARS 1
STARTCHAR A
ENCODING 65
SWIDTH 500 0
DWIDTH 8 0
BBX 8 2 0 0
BITMAP
FF
00
ENDCHAR
ENDFONT
"""


def make_device():
    frames = []
    device = SSD1306(frames.append)
    return device, frames


def snapshot(device, frames):
    device.refresh_gram()
    return frames.pop()[1:]


def test_init_sequence_frames():
    device, frames = make_device()
    assert frames[0] == b"\x00\xae"
    assert frames[-1] == b"\x00\xaf"
    assert b"\x00\x20\x01" in frames
    assert b"\x00\x21\x00\x7f" in frames
    assert b"\x00\x22\x00\x07" in frames
    refresh = frames[-2]
    assert refresh[0] == 0x40
    assert len(refresh) == 128 * 8 + 1
    assert set(refresh[1:]) == {0}


def test_fill_point_origin_sets_top_bit_of_last_page():
    device, frames = make_device()
    device.fill_point(0, 0, 1)
    data = snapshot(device, frames)
    assert data[7] == 0x80
    assert sum(data) == 0x80


def test_fill_point_then_clear_restores_blank():
    device, frames = make_device()
    blank = snapshot(device, frames)
    device.fill_point(40, 33, 1)
    assert snapshot(device, frames) != blank
    device.fill_point(40, 33, 0)
    assert snapshot(device, frames) == blank


@pytest.mark.parametrize("x, y", [(128, 0), (0, 64), (-1, 5), (200, 200)])
def test_fill_point_off_panel_ignored(x, y):
    device, frames = make_device()
    blank = snapshot(device, frames)
    device.fill_point(x, y, 1)
    assert snapshot(device, frames) == blank


def test_fill_point_wraps_as_byte():
    a, fa = make_device()
    b, fb = make_device()
    a.fill_point(256 + 3, 256 + 9, 1)
    b.fill_point(3, 9, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_fill_rectangle_matches_points():
    a, fa = make_device()
    b, fb = make_device()
    a.fill_rectangle(2, 3, 5, 6, 1)
    for x in range(2, 6):
        for y in range(3, 7):
            b.fill_point(x, y, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_clear_screen_fill_value():
    device, frames = make_device()
    device.clear_screen(0xFF)
    assert set(snapshot(device, frames)) == {0xFF}
    device.clear_screen(0)
    assert set(snapshot(device, frames)) == {0}


def test_horizontal_line_matches_rectangle():
    a, fa = make_device()
    b, fb = make_device()
    a.draw_line(10, 20, 30, 20)
    b.fill_rectangle(10, 20, 30, 20, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_vertical_line_matches_rectangle():
    a, fa = make_device()
    b, fb = make_device()
    a.draw_line(7, 50, 7, 4)
    b.fill_rectangle(7, 4, 7, 50, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_line_direction_does_not_matter():
    a, fa = make_device()
    b, fb = make_device()
    a.draw_line(3, 4, 60, 25)
    b.draw_line(60, 25, 3, 4)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_draw_bitmap_row_matches_rectangle():
    a, fa = make_device()
    b, fb = make_device()
    a.draw_bitmap(20, 30, b"\xff\x80", 9, 1)
    b.fill_rectangle(20, 30, 28, 30, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_draw_bitmap_does_not_clear():
    device, frames = make_device()
    device.clear_screen(0xFF)
    device.draw_bitmap(0, 0, b"\x00\x00", 8, 2)
    assert set(snapshot(device, frames)) == {0xFF}


def test_draw_text_without_font_raises():
    device, _ = make_device()
    with pytest.raises(RuntimeError):
        device.draw_bdf_text(0, 0, "A")


def test_draw_bdf_text_from_buffer():
    a, fa = make_device()
    b, fb = make_device()
    a.load_bdf_buffer(FONT, False)
    a.draw_bdf_text(10, 5, "A")
    b.fill_rectangle(10, 5, 17, 5, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_draw_bdf_text_clears_unlit_pixels():
    a, fa = make_device()
    a.load_bdf_buffer(FONT, False)
    a.fill_rectangle(10, 6, 17, 6, 1)
    a.draw_bdf_text(10, 5, "A")
    b, fb = make_device()
    b.fill_rectangle(10, 5, 17, 5, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_load_bdf_file_equals_buffer():
    a, fa = make_device()
    b, fb = make_device()
    a.load_bdf_file(io.BytesIO(FONT), False)
    b.load_bdf_buffer(FONT, False)
    a.draw_bdf_text(0, 0, "AA")
    b.draw_bdf_text(0, 0, "AA")
    assert snapshot(a, fa) == snapshot(b, fb)


def test_draw_bdf_text_wraps():
    a, fa = make_device()
    b, fb = make_device()
    a.load_bdf_buffer(FONT, True)
    a.draw_bdf_text(120, 5, "A")
    b.fill_rectangle(0, 7, 7, 7, 1)
    assert snapshot(a, fa) == snapshot(b, fb)


def test_draw_bdf_text_advances_between_characters():
    a, fa = make_device()
    b, fb = make_device()
    a.load_bdf_buffer(FONT, False)
    a.draw_bdf_text(0, 0, "AA")
    b.fill_rectangle(0, 0, 15, 0, 1)
    assert snapshot(a, fa) == snapshot(b, fb)