"""Codec interface: decode bytes to a raster, resize it, encode it back."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class RasterImage:
    """Decoded pixel grid owned by exactly one conversion."""

    width: int
    height: int
    pixels: Any


class ImageCodec(ABC):
    """Decode, resize and encode primitives used by the conversion unit."""

    def __init__(self, config: dict):
        codec_cfg = config.get("codec", {})
        self.quality = codec_cfg.get("quality", 100)

    @abstractmethod
    def decode(self, data: bytes) -> RasterImage:
        """Decode encoded image bytes. Raises DecodeError on invalid data."""

    @abstractmethod
    def resize(self, image: RasterImage, width: int, height: int) -> RasterImage:
        """Resample to exactly width x height with a high-quality filter."""

    @abstractmethod
    def encode(self, image: RasterImage) -> bytes:
        """Encode as JPEG at the configured quality."""


def get_codec(config: dict) -> ImageCodec:
    """Build the codec named by ``codec.backend``."""
    backend = config.get("codec", {}).get("backend", "pillow")
    if backend == "pillow":
        from .pillow_codec import PillowCodec

        return PillowCodec(config)
    if backend == "opencv":
        from .opencv_codec import OpenCVCodec

        return OpenCVCodec(config)
    raise ValueError(f"Unknown codec backend: {backend}")
