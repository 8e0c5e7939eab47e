import base64
from io import BytesIO

from PIL import Image

from demo_compare.utils.imaging import image_to_data_url


def _png(size):
    buf = BytesIO()
    Image.new("RGB", size, color="white").save(buf, format="PNG")
    return buf.getvalue()


def test_large_screenshot_is_downscaled():
    url = image_to_data_url(_png((1920, 1080)), max_size=720)
    assert url.startswith("data:image/jpeg;base64,")
    img = Image.open(BytesIO(base64.b64decode(url.split(",", 1)[1])))
    assert img.format == "JPEG"
    assert img.size == (720, 405)


def test_small_screenshot_keeps_its_size():
    url = image_to_data_url(_png((64, 48)))
    img = Image.open(BytesIO(base64.b64decode(url.split(",", 1)[1])))
    assert img.size == (64, 48)
