from datetime import date

from icon_gen import create_icon_image


def test_icon_is_64px_rgba():
    img = create_icon_image(date(2024, 6, 15))
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_icon_has_header_strip_and_text():
    img = create_icon_image(date(2024, 6, 28))
    assert img.getpixel((32, 2))[:3] == (0x00, 0x78, 0xD4)
    # Some dark text pixels below the header strip
    body = img.crop((0, 14, 64, 64)).convert("L")
    assert min(body.getdata()) < 128
