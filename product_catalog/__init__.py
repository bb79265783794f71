"""Product catalog backend and resilient API gateway."""

__version__ = "1.0.0"
