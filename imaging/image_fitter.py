from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from imaging.filmstrip_errors import InvalidImageError
from imaging.filmstrip_layout import Rect


@dataclass(frozen=True)
class Fit:
    scale: float
    offset_x: float
    offset_y: float
    width: float  # scaled image size
    height: float

    def pixel_size(self) -> Tuple[int, int]:
        return max(1, int(round(self.width))), max(1, int(round(self.height)))

    def pixel_offset(self) -> Tuple[int, int]:
        return int(round(self.offset_x)), int(round(self.offset_y))


def fit(frame: Rect, image_width: float, image_height: float) -> Fit:
    """Scale an image to fit within `frame` without cropping or distortion.

    The image is centred in the frame; when aspect ratios differ the spare
    space is split evenly on the loose axis.
    """
    if image_width <= 0 or image_height <= 0:
        raise InvalidImageError(f"Invalid image dimensions {image_width}x{image_height}")

    scale = min(frame.width / image_width, frame.height / image_height)
    scaled_w = image_width * scale
    scaled_h = image_height * scale

    return Fit(
        scale=scale,
        offset_x=frame.x + (frame.width - scaled_w) / 2,
        offset_y=frame.y + (frame.height - scaled_h) / 2,
        width=scaled_w,
        height=scaled_h,
    )
