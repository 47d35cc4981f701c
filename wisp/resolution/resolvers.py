"""Resolve relative references against the calling module.

Path mode returns filesystem paths, URL mode returns file:// URLs. Both
short-circuit absolute paths and URLs without looking at the stack;
everything else goes through the two-phase resolver:

1. Base the reference on select_primary() (or select_fallback() when the
   primary heuristic finds nothing) and keep it if the target exists.
2. Otherwise base it on select_fallback() and return that, existing or not.
   Missing targets surface later, when the loader tries to read them.
"""

import logging
import os
from collections.abc import Callable

from ..errors import ReferenceTypeError
from ..paths import is_url
from ..paths import path_to_url
from ..paths import url_to_path
from .selectors import select_fallback
from .selectors import select_primary

logger = logging.getLogger(__name__)


def _require_string(reference: object) -> None:
    if not isinstance(reference, str):
        raise ReferenceTypeError(reference)


def _join_path(base_file: str, reference: str) -> str:
    return os.path.normpath(os.path.join(os.path.dirname(base_file), reference))


def _join_url(base_file: str, reference: str) -> str:
    return path_to_url(_join_path(base_file, reference))


def _url_exists(href: str) -> bool:
    return os.path.exists(url_to_path(href))


def resolve_with(
    reference: str,
    make_primary: Callable[[str, str], str],
    exists: Callable[[str], bool],
    make_fallback: Callable[[str, str], str],
) -> str:
    """Run the two-phase resolution for a relative reference.

    Args:
        reference: Relative reference to resolve
        make_primary: Builds the primary candidate from (base_file, reference)
        exists: Existence test for the primary candidate
        make_fallback: Builds the fallback result from (base_file, reference)

    Returns:
        The primary candidate if it exists, otherwise the fallback result

    Raises:
        ReferenceTypeError: reference is not a string
    """
    _require_string(reference)

    primary_base = select_primary() or select_fallback()
    primary = make_primary(primary_base, reference)
    if exists(primary):
        return primary

    fallback_base = select_fallback()
    logger.debug(f"{primary} not found, resolving {reference!r} against {fallback_base}")
    return make_fallback(fallback_base, reference)


def resolve_path_from_caller(reference: str) -> str:
    """Resolve a reference to an absolute filesystem path.

    - file:// URLs are converted to paths
    - absolute paths are returned unchanged
    - relative paths are resolved against the calling module's directory

    Example:
        # in /project/app/settings.py
        resolve_path_from_caller("../config.json")  # "/project/config.json"

    Raises:
        ReferenceTypeError: reference is not a string
        InvalidReferenceError: reference is a URL with a scheme other than file
    """
    _require_string(reference)
    if is_url(reference):
        return url_to_path(reference)
    if os.path.isabs(reference):
        return reference

    return resolve_with(reference, _join_path, os.path.exists, _join_path)


def resolve_url_from_caller(reference: str) -> str:
    """Resolve a reference to an absolute file:// URL.

    - URLs are returned unchanged
    - absolute paths are converted to file:// URLs
    - relative paths are resolved against the calling module's directory

    Raises:
        ReferenceTypeError: reference is not a string
    """
    _require_string(reference)
    if is_url(reference):
        return reference
    if os.path.isabs(reference):
        return path_to_url(reference)

    return resolve_with(reference, _join_url, _url_exists, _join_url)


class CallerResolver:
    """Resolver bound to an explicit anchor instead of the call stack.

    A module creates one at import time and resolves every reference
    through it:

        resolver = CallerResolver(__file__)
        resolver.resolve_path("./data/defaults.json")
    """

    def __init__(self, anchor: str | os.PathLike):
        """Initialize with the anchor location.

        Args:
            anchor: A module file, a directory, or a file:// URL to either
        """
        if isinstance(anchor, os.PathLike):
            anchor = os.fspath(anchor)
        _require_string(anchor)
        path = url_to_path(anchor) if is_url(anchor) else os.path.abspath(anchor)
        self.anchor = path
        self.base_dir = path if os.path.isdir(path) else os.path.dirname(path)

    def resolve_path(self, reference: str) -> str:
        _require_string(reference)
        if is_url(reference):
            return url_to_path(reference)
        if os.path.isabs(reference):
            return reference
        return os.path.normpath(os.path.join(self.base_dir, reference))

    def resolve_url(self, reference: str) -> str:
        _require_string(reference)
        if is_url(reference):
            return reference
        return path_to_url(self.resolve_path(reference))

    def __repr__(self) -> str:
        return f"CallerResolver({self.anchor})"
