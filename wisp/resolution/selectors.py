"""Pick the file a relative reference should be resolved against.

Two selectors work over the same stack sample:

- select_primary: walks outward from the deepest frame and returns the first
  frame that leaves wisp's own source tree (src/ or dist/ under the package
  boundary, or the import package directory itself).
- select_fallback: returns the first frame that is neither an interpreter
  pseudo-file nor part of this resolution package.

Example stack, deepest first:

    0: wisp/resolution/resolvers.py   skipped (own file)
    1: wisp/loading/loader.py         in tree
    2: app/settings.py                left the tree -> returned
"""

import logging
import os
import re
from collections.abc import Iterable

from .boundary import package_boundary
from .stack import CallFrame
from .stack import sample

logger = logging.getLogger(__name__)

THIS_FILE = os.path.abspath(__file__)
RESOLUTION_DIR = os.path.dirname(THIS_FILE)
PACKAGE_DIR = os.path.dirname(RESOLUTION_DIR)

INTERNAL_TREES = ("src", "dist")

_ENTRY_RE = re.compile(r"^index\.(py|pyw|js|mjs|cjs|ts)$")
_PACKAGE_ENTRY = os.path.join(PACKAGE_DIR, "__init__.py")


def is_runtime_internal(location: str) -> bool:
    """Interpreter pseudo-files such as <frozen importlib._bootstrap> or <string>."""
    return location.startswith("<")


def is_own_file(location: str) -> bool:
    return os.path.abspath(location).startswith(RESOLUTION_DIR + os.sep)


def _candidate_locations(frames: Iterable[CallFrame]):
    for frame in frames:
        location = frame.location
        if not location or is_runtime_internal(location) or is_own_file(location):
            continue
        yield os.path.abspath(location)


def _classify(location: str, boundary: str | None) -> tuple[bool, bool]:
    """Return (in_tree, is_entry) for a frame location."""
    in_tree = location.startswith(PACKAGE_DIR + os.sep)
    is_entry = location == _PACKAGE_ENTRY

    if boundary and location.startswith(boundary + os.sep):
        segments = os.path.relpath(location, boundary).split(os.sep)
        in_tree = in_tree or segments[0] in INTERNAL_TREES
        is_entry = is_entry or (len(segments) == 1 and bool(_ENTRY_RE.match(segments[0])))

    return in_tree, is_entry


def select_primary(frames: Iterable[CallFrame] | None = None) -> str | None:
    """Find the first frame outside wisp's own tree.

    Two transitions are tracked while walking outward: leaving the source
    tree and leaving an entry file. Only the first one decides the result;
    the entry transition is reported at DEBUG level.

    Args:
        frames: Stack sample to scan (default: sample the live stack)

    Returns:
        Location of the caller, or None when no frame leaves the tree
    """
    if frames is None:
        frames = sample(skip_below=select_primary)
    boundary = package_boundary()

    previous_in_tree = False
    previous_entry = False

    for location in _candidate_locations(frames):
        in_tree, is_entry = _classify(location, boundary)

        if previous_entry and not is_entry:
            logger.debug(f"Left entry file at {location}")

        if previous_in_tree and not in_tree:
            logger.debug(f"Primary base file: {location}")
            return location

        previous_in_tree = in_tree
        previous_entry = is_entry

    return None


def select_fallback(frames: Iterable[CallFrame] | None = None) -> str:
    """Return the first frame that is not interpreter-internal or our own.

    Args:
        frames: Stack sample to scan (default: sample the live stack)

    Returns:
        Location of that frame, or this module's own file as a last resort
    """
    if frames is None:
        frames = sample(skip_below=select_fallback)

    for location in _candidate_locations(frames):
        return location
    return THIS_FILE
