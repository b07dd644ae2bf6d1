"""Pillow codec backend."""
import io

from PIL import Image, UnidentifiedImageError

from .base import ImageCodec, RasterImage
from ..utils.errors import DecodeError


class PillowCodec(ImageCodec):
    """Decode with Pillow, resample with LANCZOS, save as baseline JPEG."""

    def decode(self, data: bytes) -> RasterImage:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Invalid image data: {exc}") from exc

        # Palette and bilevel images only resample with NEAREST
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        return RasterImage(width=img.width, height=img.height, pixels=img)

    def resize(self, image: RasterImage, width: int, height: int) -> RasterImage:
        resized = image.pixels.resize((width, height), Image.LANCZOS)
        return RasterImage(width=width, height=height, pixels=resized)

    def encode(self, image: RasterImage) -> bytes:
        img = image.pixels
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")

        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=self.quality, subsampling=0)
        return buf.getvalue()
