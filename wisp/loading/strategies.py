"""Loading strategies, tried in order by the loader.

1. import_with_type_attribute: import the document through the module
   system, declaring its type on the module spec (PEP 451 exec_module).
2. import_with_type_assertion: the same import through the older PEP 302
   load_module protocol, with the type asserted on the loader.
3. read_json: read the file and parse it directly.

Every call executes a fresh document module. Document modules are never
registered in sys.modules, so a later call always sees the file as it is
on disk at that time.
"""

import hashlib
import importlib.abc
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any

from ..paths import url_to_path
from .pipeline import Reviver
from .pipeline import loads
from .pipeline import parse_json

DEFAULT_TYPE = "json"
DOCUMENT_NAMESPACE = "wisp._documents"

_PARSERS = {DEFAULT_TYPE: loads}


def document_module_name(url: str) -> str:
    """Module name given to the document module for a URL."""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
    return f"{DOCUMENT_NAMESPACE}.d{digest}"


class JsonDocumentLoader(importlib.abc.Loader):
    """Module loader exposing a JSON file as a module with a ``default`` attribute."""

    def __init__(self, url: str, asserted_type: str | None = None):
        """Initialize with the document URL.

        Args:
            url: file:// URL of the document
            asserted_type: Declared type for load_module (legacy protocol)
        """
        self.url = url
        self.path = url_to_path(url)
        self.asserted_type = asserted_type

    def create_module(self, spec):
        return None

    def exec_module(self, module: ModuleType) -> None:
        spec = module.__spec__
        declared_type = (spec.loader_state or {}).get("type") if spec else None
        self._populate(module, declared_type or self.asserted_type)

    def load_module(self, fullname: str) -> ModuleType:
        # Unlike the import system's load_module, the module stays out of sys.modules
        module = ModuleType(fullname)
        module.__loader__ = self
        self._populate(module, self.asserted_type)
        return module

    def _populate(self, module: ModuleType, declared_type: str | None) -> None:
        parse = _PARSERS.get(declared_type)
        if parse is None:
            raise ImportError(f"Unsupported document type {declared_type!r}", name=module.__name__, path=self.path)

        text = Path(self.path).read_text(encoding="utf-8")
        module.__file__ = self.path
        module.document_type = declared_type
        module.default = parse(text)

    def __repr__(self) -> str:
        return f"JsonDocumentLoader({self.url})"


def import_with_type_attribute(url: str, declared_type: str) -> ModuleType:
    """Import a document with its type carried on the module spec."""
    loader = JsonDocumentLoader(url)
    spec = importlib.util.spec_from_loader(document_module_name(url), loader, origin=loader.path)
    spec.loader_state = {"type": declared_type}
    module = importlib.util.module_from_spec(spec)
    loader.exec_module(module)
    return module


def import_with_type_assertion(url: str, declared_type: str) -> ModuleType:
    """Import a document through the legacy load_module protocol."""
    loader = JsonDocumentLoader(url, asserted_type=declared_type)
    return loader.load_module(document_module_name(url))


def default_export(module: ModuleType) -> Any:
    return module.default


def read_json(url: str, reviver: Reviver | None = None) -> Any:
    """Read a document from disk and parse it, applying the reviver."""
    text = Path(url_to_path(url)).read_text(encoding="utf-8")
    return parse_json(text, reviver)
