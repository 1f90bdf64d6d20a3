# -*- coding: utf-8 -*-
"""
Sinks for finished ASCII art: console, plain text file, rendered PNG.
"""
import os
import sys

from PIL import Image, ImageDraw, ImageFont

from ascii_errors import ConfigError, EncodeError, WriteError

TXT_OUTPUT = "output.txt"
PNG_OUTPUT = "output.png"

# one glyph cell of the PNG render, in pixels
CELL_WIDTH = 6
CELL_HEIGHT = 12


def print_ascii(art, stream=None):
    print(art, file=stream if stream is not None else sys.stdout)


def export_txt(art, path=TXT_OUTPUT):
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(art)
    except OSError as e:
        raise WriteError(f"ASCII could not be written to {path}: {e}") from e
    return path


def render_ascii(art):
    """
    Rasterize the glyph grid: white canvas, black glyphs, one fixed
    CELL_WIDTH x CELL_HEIGHT cell per character using Pillow's bitmap font.
    """
    lines = art.splitlines()
    cols = max((len(line) for line in lines), default=0)
    img = Image.new("RGB", (cols * CELL_WIDTH, len(lines) * CELL_HEIGHT), color=(255, 255, 255))
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default_imagefont()

    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            if ch == " ":
                continue
            draw.text((x * CELL_WIDTH, y * CELL_HEIGHT), ch, font=font, fill=(0, 0, 0))
    return img


def export_png(art, path=PNG_OUTPUT):
    img = render_ascii(art)
    try:
        f = open(path, "wb")
    except OSError as e:
        raise WriteError(f"File could not be created: {path}: {e}") from e

    try:
        with f:
            img.save(f, format="PNG")
    except (OSError, ValueError) as e:
        # no partial output
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        raise EncodeError(f"Image could not be encoded: {path}: {e}") from e
    return path


SINKS = {
    "stdout": print_ascii,
    "png": export_png,
    "txt": export_txt,
}


def write_output(art, output):
    """Send art to the named sink; returns the written path (None for stdout)."""
    try:
        sink = SINKS[output]
    except KeyError:
        raise ConfigError(f"Invalid output option {output!r}. Quitting.") from None
    return sink(art)
