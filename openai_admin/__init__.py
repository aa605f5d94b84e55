"""Administrative command-line client for the organization admin API."""

from .version import __version__

__all__ = ["__version__"]
