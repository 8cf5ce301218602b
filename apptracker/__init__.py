"""Application tracker service: CRUD over application records plus user auth."""
from apptracker.version import __version__

__all__ = ["__version__"]
