[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ssd1306bdf"
version = "0.1.0"
description = "SSD1306 OLED frame buffer with BDF bitmap font parsing and text rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["ssd1306", "oled", "bdf", "font", "display", "framebuffer", "i2c"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Hardware Drivers",
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ssd1306bdf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
