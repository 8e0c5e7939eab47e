import base64
from io import BytesIO

from PIL import Image


def image_to_data_url(png_bytes: bytes, max_size: int = 960, quality: int = 75) -> str:
    """Screenshot bytes as a JPEG data URL, longest side capped at `max_size` to keep tokens down."""
    img = Image.open(BytesIO(png_bytes)).convert("RGB")
    img.thumbnail((max_size, max_size), Image.LANCZOS)

    buf = BytesIO()
    img.save(buf, format="JPEG", quality=quality)
    return "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
