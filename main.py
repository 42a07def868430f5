#!/usr/bin/env python
"""Command-line entry point: compose three photos into a printable filmstrip."""
import argparse
import logging
import sys
from pathlib import Path

from controller.cups_printer import CupsPrinter, media_for_sheet
from controller.encoder import DEFAULT_JPEG_QUALITY, EncodingError, JpegEncoder
from controller.filmstrip_job import FilmstripJob
from controller.image_picker import DirectoryPicker, PathListPicker, SelectionCountError
from controller.printer_base import PrinterError
from imaging.filmstrip_errors import FilmstripError
from imaging.filmstrip_layout import (
    DEFAULT_HEIGHT_INCHES,
    DEFAULT_RESOLUTION,
    DEFAULT_SCALE,
    DEFAULT_WIDTH_INCHES,
    Canvas,
    LayoutParameters,
)
from logging_utils import logger


def build_arg_parser():
    p = argparse.ArgumentParser(
        description="Lay out three photos as two film strips and save Filmstrip.jpg",
    )
    p.add_argument("images", nargs="*", type=Path, help="Exactly three image files, top to bottom")
    p.add_argument("--directory", type=Path, help="Use the first three images in this directory instead")
    p.add_argument("--printer", help="CUPS queue to print to; omit to only save")
    p.add_argument("--copies", type=int, default=1)
    p.add_argument("--quality", type=int, default=DEFAULT_JPEG_QUALITY, help="JPEG quality (1-95)")
    p.add_argument("--resolution", type=float, default=DEFAULT_RESOLUTION, help="Pixels per inch")
    p.add_argument("--scale", type=float, default=DEFAULT_SCALE, help="Shrink factor for the sheet size")
    p.add_argument(
        "--frame-height-fraction",
        type=float,
        default=None,
        help="Frame height as a fraction of the strip; leaves even gaps when below 1/3",
    )
    p.add_argument("--verbose", action="store_true")
    return p


def build_job(args):
    params = LayoutParameters(frame_height_fraction=args.frame_height_fraction)
    if args.directory is not None:
        picker = DirectoryPicker(args.directory, expected_count=params.required_image_count)
    else:
        picker = PathListPicker(args.images, expected_count=params.required_image_count)

    canvas = Canvas.from_inches(
        DEFAULT_WIDTH_INCHES,
        DEFAULT_HEIGHT_INCHES,
        args.resolution,
        scale=args.scale,
    )
    printer = None
    if args.printer:
        printer = CupsPrinter(
            printer_name=args.printer,
            media=media_for_sheet(DEFAULT_WIDTH_INCHES, DEFAULT_HEIGHT_INCHES),
        )

    return FilmstripJob(
        picker=picker,
        encoder=JpegEncoder(quality=args.quality),
        printer=printer,
        canvas=canvas,
        params=params,
        copies=args.copies,
    )


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        job = build_job(args)
        output = job.run()
    except (FilmstripError, SelectionCountError, EncodingError, PrinterError) as e:
        logger.error("%s", e)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
