# controller/printer_base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class PrinterError(RuntimeError):
    """Raised when the printer cannot accept or process a print request."""


class Printer(ABC):
    """
    Abstract printer interface.

    The filmstrip job checks the file and copy count before handing over;
    implementations only submit an already encoded file.
    """

    def preflight(self) -> None:
        """Check the printer is reachable before any work is done. Optional."""

    @abstractmethod
    def print_file(self, file_path: Path, *, copies: int = 1, job_name: str | None = None) -> str | None:
        """
        Submit `file_path` and return the spooler's job id when it reports one.

        Implementations should raise PrinterError on failure.
        """
        raise NotImplementedError
