"""OpenCV codec backend."""
import cv2
import numpy as np

from .base import ImageCodec, RasterImage
from ..utils.errors import DecodeError


class OpenCVCodec(ImageCodec):
    """Decode with cv2.imdecode, resample with Lanczos, encode with cv2.imencode."""

    def decode(self, data: bytes) -> RasterImage:
        buf = np.frombuffer(data, dtype=np.uint8)
        try:
            img = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
        except cv2.error as exc:
            raise DecodeError(f"Invalid image data: {exc}") from exc
        if img is None:
            raise DecodeError("Invalid image data: OpenCV could not decode buffer")

        h, w = img.shape[:2]
        return RasterImage(width=w, height=h, pixels=img)

    def resize(self, image: RasterImage, width: int, height: int) -> RasterImage:
        resized = cv2.resize(
            image.pixels, (width, height), interpolation=cv2.INTER_LANCZOS4
        )
        return RasterImage(width=width, height=height, pixels=resized)

    def encode(self, image: RasterImage) -> bytes:
        ok, encoded = cv2.imencode(
            ".jpg", image.pixels, [cv2.IMWRITE_JPEG_QUALITY, int(self.quality)]
        )
        if not ok:
            raise ValueError(
                f"OpenCV failed to encode {image.width}x{image.height} image"
            )
        return encoded.tobytes()
