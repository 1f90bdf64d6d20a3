#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Convert an image to ASCII art and print it, save it as .txt or render it to .png.
Usage:
  python ascii_image.py -i input.jpg -o txt -w 80 -h 40
Notes:
- The grid is sampled nearest-neighbor, no aspect correction is applied.
- txt / png sinks write output.txt / output.png into the current directory.
"""
import argparse
import sys
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError
import numpy as np

from ascii_errors import AsciiImageError, ConfigError, DecodeError
from ascii_export import SINKS, write_output

# sparse -> dense
RAMP = " .:-=+*#%@"

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 32


@dataclass
class Options:
    input: str = ""
    output: str = "stdout"
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def validate(self):
        if not self.input:
            raise ConfigError("No image provided. Quitting.")
        if self.output not in SINKS:
            raise ConfigError(
                f"Invalid output option {self.output!r} (choose from {', '.join(SINKS)}). Quitting.")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"grid size must be positive, got {self.width}x{self.height}")
        return self


def to_8bit(img):
    """16/32-bit gray keeps its high byte, float gray is clipped to 0..255."""
    if img.mode.startswith("I;16") or img.mode == "I":
        arr = np.asarray(img).astype(np.int64) >> 8
        return Image.fromarray(np.clip(arr, 0, 255).astype(np.uint8), "L")
    if img.mode == "F":
        arr = np.asarray(img)
        return Image.fromarray(np.clip(arr, 0.0, 255.0).astype(np.uint8), "L")
    return img


def load_image(path):
    """Open and fully decode an image file (format is auto-detected)."""
    try:
        with Image.open(path) as img:
            img.load()
            return to_8bit(img.copy())
    except FileNotFoundError:
        raise DecodeError(f"failed to open image: {path}: no such file") from None
    except UnidentifiedImageError:
        raise DecodeError(f"failed to decode image: {path}: unrecognized format") from None
    except Image.DecompressionBombError as e:
        raise DecodeError(f"failed to decode image: {path}: {e}") from e
    except (OSError, ValueError) as e:
        raise DecodeError(f"failed to decode image: {path}: {e}") from e


def scale_image(img, width, height):
    """
    Nearest-neighbor resample to exactly width x height.
    Destination (x, y) takes source (x * src_w // width, y * src_h // height).
    """
    if width <= 0 or height <= 0:
        raise ConfigError(f"grid size must be positive, got {width}x{height}")
    arr = np.asarray(img.convert("RGBA"))
    src_h, src_w = arr.shape[:2]
    xs = np.arange(width) * src_w // width
    ys = np.arange(height) * src_h // height
    scaled = arr[ys[:, None], xs[None, :]]
    return Image.fromarray(np.ascontiguousarray(scaled))


def convert_to_gray(img):
    # transparent pixels count as black (premultiplied alpha)
    rgba = img.convert("RGBA")
    backdrop = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
    gray = Image.alpha_composite(backdrop, rgba).convert("L")
    return np.asarray(gray, dtype=np.uint8)


def map_to_ascii(gray):
    """Luminance grid (h, w) uint8 -> newline-joined rows of glyphs."""
    arr = np.asarray(gray).astype(np.int32)
    # 255 * 10 // 255 == 10 -> clamp to the last glyph
    idx = np.minimum(arr * len(RAMP) // 255, len(RAMP) - 1)
    chars = np.array(list(RAMP))
    mapped = chars[idx]
    lines = ["".join(row.tolist()) for row in mapped]
    return "\n".join(lines)


def image_to_ascii(path, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT):
    img = load_image(path)
    scaled = scale_image(img, width, height)
    gray = convert_to_gray(scaled)
    return map_to_ascii(gray)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigError(message)


def build_parser():
    # -h is the grid height, so the automatic help flag is replaced by --help
    p = _ArgumentParser(description="Image -> ASCII (stdout, txt or png)", add_help=False)
    p.add_argument("-i", dest="input", type=str, default="", help="Path to the image file")
    p.add_argument("-o", dest="output", type=str, default="stdout",
                   help="Output option: stdout or png or txt (default \"stdout\")")
    p.add_argument("-w", dest="width", type=int, default=DEFAULT_WIDTH,
                   help=f"Width to scale the image to (default {DEFAULT_WIDTH})")
    p.add_argument("-h", dest="height", type=int, default=DEFAULT_HEIGHT,
                   help=f"Height to scale the image to (default {DEFAULT_HEIGHT})")
    p.add_argument("--help", action="help", help="show this help message and exit")
    return p


def parse_args(argv=None):
    args = build_parser().parse_args(argv)
    return Options(input=args.input, output=args.output,
                   width=args.width, height=args.height).validate()


def main(argv=None):
    try:
        opts = parse_args(argv)
        if opts.output != "stdout":
            print(f"[mode] {opts.input} -> {opts.output} ({opts.width}x{opts.height})", file=sys.stderr)
        art = image_to_ascii(opts.input, opts.width, opts.height)
        path = write_output(art, opts.output)
    except AsciiImageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if path is not None:
        print(f"[Done] saved {path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
