from .base import ImageCodec, RasterImage, get_codec
