"""Caller-relative location resolution.

Finds the module that called into wisp by sampling the call stack and
resolves relative references against that module's directory.
"""

from .boundary import locate_boundary
from .boundary import owning_boundary
from .boundary import package_boundary
from .resolvers import CallerResolver
from .resolvers import resolve_path_from_caller
from .resolvers import resolve_url_from_caller
from .selectors import select_fallback
from .selectors import select_primary
from .stack import CallFrame
from .stack import sample

__all__ = [
    "CallFrame",
    "CallerResolver",
    "locate_boundary",
    "owning_boundary",
    "package_boundary",
    "resolve_path_from_caller",
    "resolve_url_from_caller",
    "sample",
    "select_fallback",
    "select_primary",
]
