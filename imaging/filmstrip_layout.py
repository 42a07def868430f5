from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from imaging.filmstrip_errors import ConfigurationError
from logging_utils import logger

# Physical print size of the sheet, shrunk slightly so printers don't crop it.
DEFAULT_WIDTH_INCHES = 3.879
DEFAULT_HEIGHT_INCHES = 5.819
DEFAULT_SCALE = 0.95
DEFAULT_RESOLUTION = 309  # PPI


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_box(self) -> Tuple[int, int, int, int]:
        """Whole-pixel (left, top, right, bottom) box, as Pillow expects."""
        return (
            int(round(self.x)),
            int(round(self.y)),
            int(round(self.right)),
            int(round(self.bottom)),
        )


@dataclass(frozen=True)
class Canvas:
    width: int
    height: int
    resolution: float  # pixels per inch

    @classmethod
    def from_inches(
            cls,
            width_in: float,
            height_in: float,
            resolution: float,
            scale: float = 1.0,
    ) -> "Canvas":
        return cls(
            width=int(round(width_in * scale * resolution)),
            height=int(round(height_in * scale * resolution)),
            resolution=resolution,
        )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


DEFAULT_CANVAS = Canvas.from_inches(
    DEFAULT_WIDTH_INCHES,
    DEFAULT_HEIGHT_INCHES,
    DEFAULT_RESOLUTION,
    scale=DEFAULT_SCALE,
)


@dataclass(frozen=True)
class LayoutParameters:
    """Proportional layout of the strips on the canvas.

    Widths and spacing are fractions of the canvas width, heights are
    fractions of the canvas height.

    `frame_height_fraction` is relative to the strip height. Left as None,
    every frame takes an even share of the strip and neighbouring frames
    touch. Set below 1 / frames_per_strip, the leftover height becomes equal
    gaps above, between and below the frames.
    """

    strip_count: int = 2
    strip_width_fraction: float = 0.45
    strip_height_fraction: float = 0.90
    spacing_fraction: float = 0.05
    background_color: Tuple[int, int, int] = (0, 0, 0)

    frames_per_strip: int = 3
    frame_height_fraction: Optional[float] = None

    # Every strip shows the same photos rather than the next batch of them.
    duplicate_across_strips: bool = True

    @property
    def required_image_count(self) -> int:
        if self.duplicate_across_strips:
            return self.frames_per_strip
        return self.strip_count * self.frames_per_strip

    def validate(self) -> None:
        if self.strip_count < 1:
            raise ConfigurationError(f"strip_count must be >= 1 (got {self.strip_count})")
        if self.frames_per_strip < 1:
            raise ConfigurationError(f"frames_per_strip must be >= 1 (got {self.frames_per_strip})")

        _check_fraction("strip_width_fraction", self.strip_width_fraction)
        _check_fraction("strip_height_fraction", self.strip_height_fraction)
        if self.strip_count > 1:
            _check_fraction("spacing_fraction", self.spacing_fraction)

        occupied = (
                self.strip_count * self.strip_width_fraction
                + (self.strip_count - 1) * self.spacing_fraction
        )
        if occupied > 1:
            raise ConfigurationError(
                f"Strips and spacing need {occupied:.0%} of the canvas width"
            )

        if self.frame_height_fraction is not None:
            _check_fraction("frame_height_fraction", self.frame_height_fraction)
            if self.frame_height_fraction * self.frames_per_strip > 1:
                raise ConfigurationError(
                    f"{self.frames_per_strip} frames of {self.frame_height_fraction} "
                    f"do not fit in one strip"
                )

        color = self.background_color
        if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
            raise ConfigurationError(f"background_color must be an RGB triple (got {color})")


def _check_fraction(name: str, value: float) -> None:
    if not 0 < value < 1:
        raise ConfigurationError(f"{name} must be between 0 and 1 (got {value})")


@dataclass(frozen=True)
class Frame:
    strip_index: int
    slot: int  # 0 is the top frame
    rect: Rect


@dataclass(frozen=True)
class Strip:
    index: int
    rect: Rect
    frames: Tuple[Frame, ...]


def _plan_frames(
        strip_index: int,
        strip_rect: Rect,
        params: LayoutParameters,
) -> Tuple[Frame, ...]:
    count = params.frames_per_strip
    if params.frame_height_fraction is None:
        frame_height = strip_rect.height / count
    else:
        frame_height = strip_rect.height * params.frame_height_fraction

    gap = (strip_rect.height - count * frame_height) / (count + 1)

    frames = []
    for slot in range(count):
        y = strip_rect.y + slot * (frame_height + gap) + gap
        frames.append(
            Frame(
                strip_index=strip_index,
                slot=slot,
                rect=Rect(strip_rect.x, y, strip_rect.width, frame_height),
            )
        )
    return tuple(frames)


def plan(canvas: Canvas, params: LayoutParameters) -> List[Strip]:
    """Compute every strip rectangle and the frames stacked inside it.

    The strips are centred as one group horizontally and each strip is
    centred vertically. Parameters are not validated here; call
    `params.validate()` first.
    """
    strip_w = canvas.width * params.strip_width_fraction
    strip_h = canvas.height * params.strip_height_fraction
    spacing = canvas.width * params.spacing_fraction

    total_w = strip_w * params.strip_count + spacing * (params.strip_count - 1)
    start_x = (canvas.width - total_w) / 2
    strip_y = (canvas.height - strip_h) / 2

    strips: List[Strip] = []
    for i in range(params.strip_count):
        rect = Rect(start_x + i * (strip_w + spacing), strip_y, strip_w, strip_h)
        strips.append(Strip(index=i, rect=rect, frames=_plan_frames(i, rect, params)))

    logger.debug(
        "Planned %d strips of %.1fx%.1f on %dx%d canvas",
        params.strip_count, strip_w, strip_h, canvas.width, canvas.height,
    )
    return strips
