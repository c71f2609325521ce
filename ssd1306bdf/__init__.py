"""SSD1306 OLED frame buffer with BDF font reading and text rendering."""

__version__ = "0.1.0"
__all__ = ["bdf", "ssd1306"]