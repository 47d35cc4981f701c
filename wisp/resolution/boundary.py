"""Package boundary lookup.

The boundary is the root directory of wisp's own distribution: the nearest
ancestor holding a packaging manifest, provided the import package sits
directly in it (flat layout) or in its src/ directory (src layout). An
installed wheel has no manifest of its own; the nearest manifest above it
belongs to some other project (a virtualenv inside the user's checkout),
so the boundary is None.
"""

import functools
import os

MANIFEST_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg")

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def locate_boundary(self_location: str, markers: tuple[str, ...] = MANIFEST_MARKERS) -> str | None:
    """Walk up from self_location to the nearest directory containing a marker.

    Args:
        self_location: File or directory to start from
        markers: File names that identify a package root

    Returns:
        Absolute directory path, or None when the filesystem root is reached
    """
    current = os.path.abspath(self_location)
    while current != os.path.dirname(current):
        if any(os.path.isfile(os.path.join(current, marker)) for marker in markers):
            return current
        current = os.path.dirname(current)
    return None


def owning_boundary(package_dir: str, markers: tuple[str, ...] = MANIFEST_MARKERS) -> str | None:
    """Boundary of the distribution that ships package_dir, if it has one.

    Returns:
        The manifest directory when package_dir is ``<boundary>/<name>`` or
        ``<boundary>/src/<name>``, otherwise None
    """
    package_dir = os.path.abspath(package_dir)
    boundary = locate_boundary(package_dir, markers)
    if boundary is None:
        return None
    if os.path.dirname(package_dir) in (boundary, os.path.join(boundary, "src")):
        return boundary
    return None


@functools.cache
def package_boundary() -> str | None:
    """Boundary of the wisp distribution, computed once per process."""
    return owning_boundary(PACKAGE_DIR)
