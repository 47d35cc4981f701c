"""JSON document loading with tiered strategies and fallback retry."""

from .loader import load
from .loader import load_sync
from .loader import locate
from .options import LoadOptions
from .pipeline import OMIT
from .strategies import DEFAULT_TYPE

__all__ = [
    "DEFAULT_TYPE",
    "LoadOptions",
    "OMIT",
    "load",
    "load_sync",
    "locate",
]
