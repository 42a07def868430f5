from __future__ import annotations

from pathlib import Path
from typing import IO, List, Optional, Union

from PIL import Image, UnidentifiedImageError

from controller.encoder import Encoder
from controller.image_picker import ImagePicker
from controller.printer_base import Printer, PrinterError
from imaging.compositor import render
from imaging.filmstrip_errors import FilmstripError
from imaging.filmstrip_layout import DEFAULT_CANVAS, Canvas, LayoutParameters, plan
from logging_utils import logger


class ImageLoadError(FilmstripError):
    """A selected file could not be opened or decoded as an image."""


def open_image(source: Union[Path, IO[bytes]], label: str) -> Image.Image:
    try:
        img = Image.open(source)
        img.load()
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Failed to load image: {label}") from e
    return img


def compose_filmstrip(
        images: List[Image.Image],
        canvas: Canvas,
        params: LayoutParameters,
) -> Image.Image:
    """Validate, plan and render in one step. Shared by the CLI and web app."""
    params.validate()
    strips = plan(canvas, params)
    return render(
        canvas,
        strips,
        images,
        params.background_color,
        duplicate_across_strips=params.duplicate_across_strips,
    )


class FilmstripJob:
    """
    One run of the filmstrip tool: pick photos, compose, save, optionally print.

    Nothing survives the run except the saved file; source images and the
    composed raster are closed before `run` returns.
    """

    def __init__(
            self,
            picker: ImagePicker,
            encoder: Encoder,
            printer: Optional[Printer] = None,
            canvas: Canvas = DEFAULT_CANVAS,
            params: LayoutParameters = LayoutParameters(),
            copies: int = 1,
    ) -> None:
        self._picker = picker
        self._encoder = encoder
        if copies < 1:
            raise PrinterError(f"copies must be >= 1 (got {copies})")

        self._printer = printer
        self._canvas = canvas
        self._params = params
        self._copies = copies

    def run(self) -> Path:
        self._params.validate()
        if self._printer is not None:
            self._printer.preflight()

        paths = self._picker.pick()
        logger.info("Composing filmstrip from %s", ", ".join(p.name for p in paths))

        images: List[Image.Image] = []
        try:
            for path in paths:
                images.append(open_image(path, str(path)))

            raster = compose_filmstrip(images, self._canvas, self._params)
            try:
                output = self._encoder.save(
                    raster,
                    self._encoder.output_path(paths[0]),
                    dpi=self._canvas.resolution,
                )
            finally:
                raster.close()
        finally:
            for img in images:
                img.close()

        logger.info("Saved %s", output)

        if self._printer is not None:
            self._print(output)

        return output

    def _print(self, output: Path) -> None:
        if not output.is_file():
            raise PrinterError(f"Nothing to print at {output}")
        job_id = self._printer.print_file(output, copies=self._copies)
        if job_id:
            logger.info("Print job %s submitted", job_id)
