import pytest
from PIL import Image as PILImage

from cubraycast.image import Image, Texture, load_png
from cubraycast.mathutil import convert_to_mlx42_endian


def test_new_image_is_blank():
    img = Image(4, 3)
    assert img.pixels == [0] * 12


def test_put_and_get_round_trip():
    img = Image(5, 5)
    img.put_pixel(2, 3, 0xFF8000FF)
    assert img.get_pixel(2, 3) == 0xFF8000FF
    assert img.get_pixel(3, 2) == 0


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_put_pixel_out_of_bounds(x, y):
    img = Image(5, 5)
    with pytest.raises(IndexError):
        img.put_pixel(x, y, 1)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_safe_put_pixel_ignores_out_of_bounds(x, y):
    img = Image(5, 5)
    img.safe_put_pixel(x, y, 0xFFFFFFFF)
    assert img.pixels == [0] * 25


def test_safe_put_pixel_draws_inside():
    img = Image(5, 5)
    img.safe_put_pixel(4, 4, 0x12345678)
    assert img.get_pixel(4, 4) == 0x12345678


def test_get_pixel_out_of_bounds():
    with pytest.raises(IndexError):
        Image(2, 2).get_pixel(2, 0)


def test_texture_pixel_little_endian():
    tex = Texture(2, 1, bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    assert convert_to_mlx42_endian(tex.pixel(0, 0)) == 0x01020304
    assert tex.pixel(1, 0) == int.from_bytes(bytes([5, 6, 7, 8]), "little")


def test_texture_pixel_out_of_bounds():
    tex = Texture(1, 1, bytes(4))
    with pytest.raises(IndexError):
        tex.pixel(0, 1)


def test_load_png(tmp_path):
    path = tmp_path / "tex.png"
    src = PILImage.new("RGBA", (3, 2))
    src.putpixel((2, 1), (10, 20, 30, 40))
    src.save(path)
    tex = load_png(path)
    assert (tex.width, tex.height) == (3, 2)
    assert tex.pixel(2, 1) == int.from_bytes(bytes([10, 20, 30, 40]), "little")
    assert tex.pixel(0, 0) == 0


def test_load_png_missing(tmp_path):
    with pytest.raises(OSError):
        load_png(tmp_path / "missing.png")