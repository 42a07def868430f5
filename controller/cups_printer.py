# controller/cups_printer.py

from __future__ import annotations

import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from controller.printer_base import Printer, PrinterError
from logging_utils import logger

DEFAULT_JOB_NAME = "Filmstrip"

_REQUEST_ID = re.compile(r"request id is (\S+)")


def media_for_sheet(width_in: float, height_in: float) -> str:
    """CUPS custom media name for a sheet of the given size in inches."""
    return f"Custom.{width_in:g}x{height_in:g}in"


class CupsPrinter(Printer):
    """
    Sends the saved filmstrip to a CUPS queue with a single `lp` job.

    Copies are left to CUPS (`-n`) so the two strips come out as one job the
    queue can collate. The sheet is scaled to the page unless `fit_to_page`
    is turned off.
    """

    def __init__(
            self,
            printer_name: str,
            lp_path: str = "lp",
            media: Optional[str] = None,
            fit_to_page: bool = True,
            extra_args: Optional[Sequence[str]] = None,
    ) -> None:
        self._printer_name = printer_name
        self._lp_path = lp_path
        self._media = media
        self._fit_to_page = fit_to_page
        self._extra_args = list(extra_args or [])

    def preflight(self) -> None:
        if shutil.which(self._lp_path) is None:
            raise PrinterError(f"CUPS not available: '{self._lp_path}' not found in PATH")

    def build_command(self, file_path: Path, copies: int, job_name: str) -> List[str]:
        cmd = [self._lp_path, "-d", self._printer_name, "-n", str(copies), "-t", job_name]
        if self._media:
            cmd += ["-o", f"media={self._media}"]
        if self._fit_to_page:
            cmd += ["-o", "fit-to-page"]
        return cmd + self._extra_args + [str(file_path)]

    def print_file(self, file_path: Path, *, copies: int = 1, job_name: str | None = None) -> str | None:
        self.preflight()

        cmd = self.build_command(file_path, copies, job_name or DEFAULT_JOB_NAME)
        proc = subprocess.run(cmd, capture_output=True, text=True)
        if proc.returncode != 0:
            out = ((proc.stdout or "") + (proc.stderr or "")).strip()
            raise PrinterError(f"{self._printer_name} rejected {file_path.name}: {out}")

        match = _REQUEST_ID.search(proc.stdout or "")
        job_id = match.group(1) if match else None
        logger.info("Queued %s x%d on %s (job %s)", file_path.name, copies, self._printer_name, job_id or "?")
        return job_id
