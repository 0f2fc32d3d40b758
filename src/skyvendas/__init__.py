"""
SkyVendas.

Paged list synchronization for the SkyVendas marketplace API.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skyvendas")
except PackageNotFoundError:
    __version__ = "unknown"

from .services.collection import PagedCollection

__all__ = ["__version__", "PagedCollection"]
