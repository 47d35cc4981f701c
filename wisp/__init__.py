"""wisp - load JSON documents relative to the calling module.

    from wisp import load, load_sync

    data = load_sync("./fixtures/sample.json")
    data = await load("./config.json", fallback="./config.default.json")
"""

from .context import Wisp
from .context import bind
from .errors import DocumentLoadError
from .errors import DocumentValidationError
from .errors import FallbackCycleError
from .errors import InvalidReferenceError
from .errors import ReferenceTypeError
from .errors import UnsupportedTypeError
from .errors import WispError
from .loading import OMIT
from .loading import LoadOptions
from .loading import load
from .loading import load_sync
from .resolution import resolve_path_from_caller
from .resolution import resolve_url_from_caller

__version__ = "1.0.0"

__all__ = [
    "DocumentLoadError",
    "DocumentValidationError",
    "FallbackCycleError",
    "InvalidReferenceError",
    "LoadOptions",
    "OMIT",
    "ReferenceTypeError",
    "UnsupportedTypeError",
    "Wisp",
    "WispError",
    "bind",
    "load",
    "load_sync",
    "resolve_path_from_caller",
    "resolve_url_from_caller",
]
