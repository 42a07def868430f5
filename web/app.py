"""
Flask application exposing the filmstrip compositor over HTTP.
"""
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Optional

from flask import Flask, Response, jsonify, request
from PIL import Image

from controller.encoder import DEFAULT_FILENAME, Encoder, EncodingError, JpegEncoder
from controller.filmstrip_job import ImageLoadError, compose_filmstrip, open_image
from controller.printer_base import Printer, PrinterError
from imaging.filmstrip_errors import InvalidImageError
from imaging.filmstrip_layout import DEFAULT_CANVAS, Canvas, LayoutParameters
from logging_utils import logger


def _error(code: str, status: int, message: str | None = None):
    body = {"ok": False, "error": code}
    if message:
        body["message"] = message
    return jsonify(body), status


def create_app(
        printer: Optional[Printer] = None,
        canvas: Optional[Canvas] = None,
        params: Optional[LayoutParameters] = None,
        encoder: Optional[Encoder] = None,
):
    canvas = canvas or DEFAULT_CANVAS
    params = params or LayoutParameters()
    encoder = encoder or JpegEncoder()
    params.validate()

    app = Flask(__name__)
    app.config["CANVAS"] = canvas
    app.config["LAYOUT"] = params

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"ok": True})

    @app.route("/filmstrip", methods=["POST"])
    def filmstrip():
        wants_print = request.args.get("print") == "1"
        if wants_print and printer is None:
            return _error("printer_not_configured", 409)

        uploads = request.files.getlist("images")
        if len(uploads) != params.required_image_count:
            return _error("wrong_selection_count", 400)

        images: List[Image.Image] = []
        try:
            for upload in uploads:
                images.append(open_image(upload.stream, upload.filename or "upload"))
            raster = compose_filmstrip(images, canvas, params)
            try:
                data = encoder.to_bytes(raster, dpi=canvas.resolution)
            finally:
                raster.close()
        except (ImageLoadError, InvalidImageError) as e:
            logger.error("Rejected upload: %s", e)
            return _error("invalid_image", 400, str(e))
        except EncodingError as e:
            logger.error("Encoding failed: %s", e)
            return _error("encoding_failed", 500, str(e))
        finally:
            for img in images:
                img.close()

        if wants_print:
            try:
                _print_bytes(printer, data)
            except PrinterError as e:
                logger.error("Printing failed: %s", e)
                return _error("print_failed", 502, str(e))

        return Response(data, mimetype="image/jpeg")

    return app


def _print_bytes(printer: Printer, data: bytes) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / DEFAULT_FILENAME
        path.write_bytes(data)
        printer.print_file(path)
