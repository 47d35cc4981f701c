"""Loaders bound to an explicit anchor.

Stack sampling guesses the caller from the shape of the call stack. A module
that wants no guessing binds a loader to its own file once:

    from wisp import bind

    documents = bind(__file__)

    defaults = documents.load_sync("./defaults.json")
"""

import os
from typing import Any

from .loading import load
from .loading import load_sync
from .paths import path_to_url
from .resolution import CallerResolver


class Wisp:
    """Loader and resolver bound to one anchor location."""

    def __init__(self, anchor: str | os.PathLike):
        """Initialize with the anchor.

        Args:
            anchor: Module file (usually __file__), directory, or file:// URL
        """
        self.resolver = CallerResolver(anchor)
        self.base_url = path_to_url(self.resolver.base_dir) + "/"

    def resolve_path(self, reference: str) -> str:
        return self.resolver.resolve_path(reference)

    def resolve_url(self, reference: str) -> str:
        return self.resolver.resolve_url(reference)

    async def load(self, reference: str | os.PathLike, **options: Any) -> Any:
        """Load a document relative to the anchor; see wisp.load for options."""
        options.setdefault("base", self.base_url)
        return await load(reference, **options)

    def load_sync(self, reference: str | os.PathLike, **options: Any) -> Any:
        """Blocking variant of load()."""
        options.setdefault("base", self.base_url)
        return load_sync(reference, **options)

    def __repr__(self) -> str:
        return f"Wisp({self.resolver.anchor})"


def bind(anchor: str | os.PathLike) -> Wisp:
    """Create a loader whose relative references resolve against anchor."""
    return Wisp(anchor)
