import os

import numpy as np
import pytest
from PIL import Image

from ascii_errors import ConfigError, EncodeError, WriteError
from ascii_export import (CELL_HEIGHT, CELL_WIDTH, SINKS, export_png, export_txt,
                          print_ascii, render_ascii, write_output)

ART = " .:-=\n+*#%@"


def test_print_verbatim(capsys):
    print_ascii(ART)
    assert capsys.readouterr().out == ART + "\n"


def test_txt_round_trip(tmp_path):
    path = tmp_path / "art.txt"
    assert export_txt(ART, str(path)) == str(path)
    with open(path, encoding="utf-8", newline="") as f:
        assert f.read() == ART


def test_txt_unwritable(tmp_path):
    with pytest.raises(WriteError):
        export_txt(ART, str(tmp_path / "no_such_dir" / "art.txt"))


def test_render_canvas_size():
    img = render_ascii(ART)
    assert img.size == (5 * CELL_WIDTH, 2 * CELL_HEIGHT)
    assert (CELL_WIDTH, CELL_HEIGHT) == (6, 12)


def test_render_blank_grid_is_white():
    arr = np.asarray(render_ascii("   \n   "))
    assert arr.shape == (24, 18, 3)
    assert (arr == 255).all()


def test_render_dense_glyphs_are_black():
    arr = np.asarray(render_ascii("@@\n@@").convert("L"))
    assert arr.min() == 0
    # each cell gets ink of its own
    for y in range(2):
        for x in range(2):
            cell = arr[y * CELL_HEIGHT:(y + 1) * CELL_HEIGHT, x * CELL_WIDTH:(x + 1) * CELL_WIDTH]
            assert cell.min() < 128


def test_png_written(tmp_path):
    path = tmp_path / "art.png"
    export_png(ART, str(path))
    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.size == (30, 24)


def test_png_unwritable(tmp_path):
    with pytest.raises(WriteError):
        export_png(ART, str(tmp_path / "no_such_dir" / "art.png"))


def test_png_encode_failure_leaves_no_file(monkeypatch, tmp_path):
    def broken_save(self, fp, format=None, **params):
        raise OSError("encoder error -2")
    monkeypatch.setattr(Image.Image, "save", broken_save)

    path = tmp_path / "art.png"
    with pytest.raises(EncodeError, match="encoder error"):
        export_png(ART, str(path))
    assert not os.path.exists(path)


def test_sink_names():
    assert sorted(SINKS) == ["png", "stdout", "txt"]


def test_write_output_unknown_sink():
    with pytest.raises(ConfigError):
        write_output(ART, "jpg")


def test_write_output_stdout(capsys):
    assert write_output(ART, "stdout") is None
    assert capsys.readouterr().out == ART + "\n"
