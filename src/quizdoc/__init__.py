"""Quiz generation from uploaded learning material."""

__version__ = "0.1.0"
