from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple

from PIL import Image

DEFAULT_FILENAME = "Filmstrip.jpg"
# Roughly Photoshop's JPEG quality 10 of 12.
DEFAULT_JPEG_QUALITY = 85


class EncodingError(RuntimeError):
    """Raised when the finished raster cannot be written out."""


class Encoder(ABC):
    """Serializes the flattened filmstrip raster."""

    @abstractmethod
    def output_path(self, first_image: Path) -> Path:
        raise NotImplementedError

    @abstractmethod
    def save(self, raster: Image.Image, path: Path, *, dpi: float) -> Path:
        raise NotImplementedError

    @abstractmethod
    def to_bytes(self, raster: Image.Image, *, dpi: float) -> bytes:
        raise NotImplementedError


class JpegEncoder(Encoder):
    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY, filename: str = DEFAULT_FILENAME) -> None:
        if not 1 <= quality <= 95:
            raise EncodingError(f"JPEG quality must be between 1 and 95 (got {quality})")
        self.quality = quality
        self.filename = filename

    def output_path(self, first_image: Path) -> Path:
        """The filmstrip is saved next to the first selected photo."""
        return first_image.parent / self.filename

    def _options(self, dpi: float) -> dict:
        rounded: Tuple[int, int] = (int(round(dpi)), int(round(dpi)))
        return {"format": "JPEG", "quality": self.quality, "dpi": rounded}

    def save(self, raster: Image.Image, path: Path, *, dpi: float) -> Path:
        try:
            raster.convert("RGB").save(path, **self._options(dpi))
        except (OSError, ValueError) as e:
            raise EncodingError(f"Failed to write {path}") from e
        return path

    def to_bytes(self, raster: Image.Image, *, dpi: float) -> bytes:
        buffer = io.BytesIO()
        try:
            raster.convert("RGB").save(buffer, **self._options(dpi))
        except (OSError, ValueError) as e:
            raise EncodingError("Failed to encode filmstrip") from e
        return buffer.getvalue()
