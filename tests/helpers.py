from pathlib import Path

from PIL import Image


def make_image(path: Path, size=(40, 30), color=(255, 0, 0)) -> Path:
    """Write a solid-colour image and return its path."""
    img = Image.new("RGB", size, color)
    img.save(path)
    return path
