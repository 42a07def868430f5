from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from PIL import Image

from imaging.filmstrip_errors import FilmstripError, InvalidImageError
from imaging.filmstrip_layout import Canvas, Strip
from imaging.image_fitter import Fit, fit
from logging_utils import logger

BACKGROUND_LAYER_PREFIX = "Filmstrip_"
CANVAS_FILL = (255, 255, 255)


@dataclass(frozen=True)
class PlacedImage:
    strip_index: int
    slot: int
    image_index: int
    fit: Fit


@dataclass
class Layer:
    name: str
    image: Image.Image
    position: Tuple[int, int]
    is_background: bool = False


def _image_index(strip: Strip, slot: int, duplicate_across_strips: bool) -> int:
    if duplicate_across_strips:
        return slot
    return strip.index * len(strip.frames) + slot


def place_images(
        strips: Sequence[Strip],
        image_sizes: Sequence[Tuple[int, int]],
        *,
        duplicate_across_strips: bool = True,
) -> List[PlacedImage]:
    """Fit a source image into every frame of every strip."""
    placements: List[PlacedImage] = []
    for strip in strips:
        for frame in strip.frames:
            index = _image_index(strip, frame.slot, duplicate_across_strips)
            if index >= len(image_sizes):
                raise FilmstripError(
                    f"Strip {strip.index + 1} needs image {index + 1} "
                    f"but only {len(image_sizes)} were supplied"
                )
            width, height = image_sizes[index]
            try:
                placement = fit(frame.rect, width, height)
            except InvalidImageError as e:
                raise InvalidImageError(
                    f"Image {index + 1} cannot be placed in strip {strip.index + 1}, "
                    f"frame {frame.slot + 1}: {e}"
                ) from e
            placements.append(
                PlacedImage(
                    strip_index=strip.index,
                    slot=frame.slot,
                    image_index=index,
                    fit=placement,
                )
            )
    return placements


def _background_layer(strip: Strip, color: Tuple[int, int, int]) -> Layer:
    left, top, right, bottom = strip.rect.to_box()
    return Layer(
        name=f"{BACKGROUND_LAYER_PREFIX}{strip.index + 1}",
        image=Image.new("RGB", (right - left, bottom - top), color),
        position=(left, top),
        is_background=True,
    )


def _photo_layer(placed: PlacedImage, source: Image.Image) -> Layer:
    resized = source.resize(placed.fit.pixel_size(), resample=Image.Resampling.BICUBIC)
    return Layer(
        name=f"Photo_{placed.strip_index + 1}_{placed.slot + 1}",
        image=resized,
        position=placed.fit.pixel_offset(),
    )


def build_layers(
        strips: Sequence[Strip],
        placements: Sequence[PlacedImage],
        images: Sequence[Image.Image],
        background_color: Tuple[int, int, int],
) -> List[Layer]:
    """Create layers in the order they are issued: each strip's background,
    then that strip's photos. The list is bottom-first.
    """
    layers: List[Layer] = []
    for strip in strips:
        layers.append(_background_layer(strip, background_color))
        for placed in placements:
            if placed.strip_index == strip.index:
                layers.append(_photo_layer(placed, images[placed.image_index]))
    return layers


def move_backgrounds_to_bottom(layers: Sequence[Layer]) -> List[Layer]:
    backgrounds = [layer for layer in layers if layer.is_background]
    others = [layer for layer in layers if not layer.is_background]
    return backgrounds + others


def flatten(layers: Sequence[Layer], size: Tuple[int, int]) -> Image.Image:
    raster = Image.new("RGB", size, CANVAS_FILL)
    for layer in layers:
        raster.paste(layer.image, layer.position)
    return raster


def render(
        canvas: Canvas,
        strips: Sequence[Strip],
        images: Sequence[Image.Image],
        background_color: Tuple[int, int, int],
        *,
        duplicate_across_strips: bool = True,
) -> Image.Image:
    """Composite the photos onto the planned strips.

    - Strip backgrounds are solid fills and always end up under the photos.
    - Photos are contain-fit into their frames with bicubic resampling.
    - The result is a single RGB raster the size of the canvas.
    """
    placements = place_images(
        strips,
        [img.size for img in images],
        duplicate_across_strips=duplicate_across_strips,
    )
    sources = [img.convert("RGB") for img in images]

    layers = build_layers(strips, placements, sources, background_color)
    layers = move_backgrounds_to_bottom(layers)

    logger.debug("Flattening %d layers (%d photos)", len(layers), len(placements))
    return flatten(layers, canvas.size)
