from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".tif", ".tiff")

_COUNT_WORDS = {1: "one", 2: "two", 3: "three", 4: "four", 5: "five", 6: "six"}


class SelectionCountError(ValueError):
    """The user picked the wrong number of images, or an unusable file."""


def _selection_message(expected_count: int) -> str:
    word = _COUNT_WORDS.get(expected_count, str(expected_count))
    noun = "image" if expected_count == 1 else "images"
    return f"Please select exactly {word} {noun}."


class ImagePicker(ABC):
    """Supplies the source image files for one filmstrip, in frame order."""

    @abstractmethod
    def pick(self) -> List[Path]:
        raise NotImplementedError


class PathListPicker(ImagePicker):
    """Uses paths that were already chosen, e.g. on the command line."""

    def __init__(self, paths: Sequence[Path], expected_count: int = 3) -> None:
        self._paths = [Path(p) for p in paths]
        self._expected_count = expected_count

    def pick(self) -> List[Path]:
        if len(self._paths) != self._expected_count:
            raise SelectionCountError(_selection_message(self._expected_count))

        for path in self._paths:
            if not path.is_file():
                raise SelectionCountError(f"Image file not found: {path}")
            if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
                raise SelectionCountError(f"Unsupported image type: {path.name}")

        return list(self._paths)


class DirectoryPicker(ImagePicker):
    """Takes the first images of a directory in file name order."""

    def __init__(self, directory: Path, expected_count: int = 3) -> None:
        self._directory = Path(directory)
        self._expected_count = expected_count

    def pick(self) -> List[Path]:
        if not self._directory.is_dir():
            raise SelectionCountError(f"Not a directory: {self._directory}")

        candidates = sorted(
            p for p in self._directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
        )
        if len(candidates) < self._expected_count:
            raise SelectionCountError(_selection_message(self._expected_count))
        return candidates[: self._expected_count]
