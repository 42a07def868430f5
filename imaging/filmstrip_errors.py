class FilmstripError(Exception):
    """Base class for filmstrip layout and compositing failures."""


class ConfigurationError(FilmstripError):
    """Layout parameters that cannot produce a usable strip geometry."""


class InvalidImageError(FilmstripError):
    """A source image with zero or negative pixel dimensions."""
