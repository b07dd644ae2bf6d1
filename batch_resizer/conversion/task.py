"""Per-file work items."""
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ..output.destination import DestinationManager
from ..utils.errors import DecodeError, InvalidScaleError


@dataclass
class ImageFile:
    """A discovered source image. Its bytes are read on first access and held until released."""

    path: Path
    _content: Optional[bytes] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.path = Path(self.path).resolve()

    @property
    def base_name(self) -> str:
        return self.path.stem

    def read_bytes(self) -> bytes:
        if self._content is None:
            try:
                self._content = self.path.read_bytes()
            except OSError as exc:
                raise DecodeError(f"Cannot read {self.path}: {exc}") from exc
        return self._content

    @property
    def loaded(self) -> bool:
        return self._content is not None

    def release(self) -> None:
        """Drop the cached bytes once they have been decoded."""
        self._content = None


@dataclass
class ConversionTask:
    """One source image, where its output goes, and how much to scale it."""

    source: ImageFile
    dest_dir: Path
    scale: float

    @classmethod
    def create(cls, source_path, dest_dir, scale: float) -> "ConversionTask":
        return cls(ImageFile(source_path), Path(dest_dir), validate_scale(scale))

    @property
    def output_path(self) -> Path:
        return DestinationManager.output_path(self.dest_dir, self.source.base_name)


def validate_scale(scale: float) -> float:
    try:
        scale = float(scale)
    except (TypeError, ValueError) as exc:
        raise InvalidScaleError(f"Scale must be a number, got {scale!r}") from exc
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidScaleError(f"Scale must be positive, got {scale}")
    return scale


def target_size(width: int, height: int, scale: float) -> Tuple[int, int]:
    """Scaled dimensions, truncated toward zero (never rounded)."""
    return math.floor(width * scale), math.floor(height * scale)
