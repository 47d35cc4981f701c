"""Tiered JSON document loading.

load() tries the import strategies first and reads the file directly as a
last resort; load_sync() only reads the file. Failures of the import
strategies are expected (unsupported type, missing file) and are dropped
silently; only the last strategy's failure counts. When everything failed
and a fallback reference was given, the whole load is repeated for it.
"""

import asyncio
import logging
import os
from typing import Any
from urllib.parse import quote
from urllib.parse import urljoin

from ..errors import DocumentLoadError
from ..errors import FallbackCycleError
from ..errors import InvalidReferenceError
from ..errors import ReferenceTypeError
from ..errors import UnsupportedTypeError
from ..paths import is_url
from ..paths import path_to_url
from ..resolution import resolve_url_from_caller
from ..utils.error_format import format_error_message
from . import strategies
from .options import LoadOptions
from .pipeline import Reviver
from .pipeline import Validator
from .pipeline import apply_reviver
from .pipeline import finish
from .strategies import DEFAULT_TYPE

logger = logging.getLogger(__name__)


def _base_url(base: str | os.PathLike) -> str:
    base = os.fspath(base)
    if is_url(base):
        return base
    if not os.path.isabs(base):
        raise InvalidReferenceError(f"base must be a URL or an absolute path: {base}")
    url = path_to_url(base)
    return url + "/" if os.path.isdir(base) else url


def locate(reference: Any, base: str | os.PathLike | None = None) -> str:
    """Turn a reference into the URL the strategies load from.

    Raises:
        ReferenceTypeError: reference is not a string or path
    """
    if isinstance(reference, os.PathLike):
        reference = os.fspath(reference)
    if not isinstance(reference, str):
        raise ReferenceTypeError(reference)

    if is_url(reference):
        return reference
    if os.path.isabs(reference):
        return path_to_url(reference)
    if base is not None:
        return urljoin(_base_url(base), quote(reference.replace(os.sep, "/")))
    return resolve_url_from_caller(reference)


def _next_location(options: LoadOptions, visited: list[str], error: DocumentLoadError) -> str:
    """Locate the fallback reference, refusing locations already tried.

    A fallback that failed locates to itself again; its own failure is
    raised unchanged. Reaching an earlier location is a cycle.
    """
    url = locate(options.fallback, options.base)
    if url == visited[-1]:
        raise error
    if url in visited:
        chain = " -> ".join([*visited, url])
        raise FallbackCycleError(f"Fallback cycle detected: {chain}", url) from error
    logger.debug(f"Loading fallback {url} after {visited[-1]} failed")
    return url


def _exhausted(url: str, error: Exception) -> DocumentLoadError:
    return DocumentLoadError(f"Failed to load JSON file at {url}: {format_error_message(error)}", url)


async def _load(url: str, options: LoadOptions, visited: list[str]) -> Any:
    visited.append(url)

    last_error: Exception | None = None
    for attempt in (strategies.import_with_type_attribute, strategies.import_with_type_assertion):
        try:
            module = await asyncio.to_thread(attempt, url, options.type)
            value = apply_reviver(strategies.default_export(module), options.reviver)
        except Exception as e:
            last_error = e
            continue
        return finish(value, options.validate)

    if options.type == DEFAULT_TYPE:
        try:
            value = await asyncio.to_thread(strategies.read_json, url, options.reviver)
        except Exception as e:
            failure = _exhausted(url, e)
            failure.__cause__ = e
        else:
            return finish(value, options.validate)
    else:
        failure = UnsupportedTypeError(options.type, url)
        failure.__cause__ = last_error

    if options.fallback is None:
        logger.debug(f"All strategies failed for {url}")
        raise failure
    return await _load(_next_location(options, visited, failure), options, visited)


def _load_sync(url: str, options: LoadOptions, visited: list[str]) -> Any:
    visited.append(url)

    if options.type == DEFAULT_TYPE:
        try:
            value = strategies.read_json(url, options.reviver)
        except Exception as e:
            failure = _exhausted(url, e)
            failure.__cause__ = e
        else:
            return finish(value, options.validate)
    else:
        failure = UnsupportedTypeError(options.type, url)

    if options.fallback is None:
        logger.debug(f"Reading {url} failed")
        raise failure
    return _load_sync(_next_location(options, visited, failure), options, visited)


async def load(
    reference: str | os.PathLike,
    *,
    base: str | os.PathLike | None = None,
    validate: Validator | None = None,
    reviver: Reviver | None = None,
    type: str = DEFAULT_TYPE,
    fallback: str | os.PathLike | None = None,
) -> Any:
    """Load a JSON document relative to the calling module.

    Relative references resolve against the directory of the module that
    awaits this coroutine. Await it directly; a task created elsewhere no
    longer has the caller on its stack, so pass ``base`` in that case.

    Args:
        reference: Relative path, absolute path, or file:// URL
        base: URL or absolute path to resolve relative references against
        validate: Called with the value; any exception rejects it
        reviver: (key, value) transform applied during parsing
        type: Declared document type (default "json")
        fallback: Reference to load when the document cannot be loaded

    Returns:
        A private deep copy of the parsed document

    Raises:
        ReferenceTypeError: reference is not a string or path
        DocumentValidationError: validate raised
        DocumentLoadError: the document (and any fallback) could not be loaded
        UnsupportedTypeError: type is not "json" and no strategy accepted it
        FallbackCycleError: the fallback chain came back to an earlier location

    Example:
        config = await load("./config.json", fallback="./config.default.json")
    """
    options = LoadOptions(base=base, validate=validate, reviver=reviver, type=type, fallback=fallback)
    # Resolve before the first await: the caller's frame must still be on the stack
    url = locate(reference, options.base)
    return await _load(url, options, [])


def load_sync(
    reference: str | os.PathLike,
    *,
    base: str | os.PathLike | None = None,
    validate: Validator | None = None,
    reviver: Reviver | None = None,
    type: str = DEFAULT_TYPE,
    fallback: str | os.PathLike | None = None,
) -> Any:
    """Blocking counterpart of load(); reads the file directly.

    Takes the same arguments and raises the same errors as load().
    """
    options = LoadOptions(base=base, validate=validate, reviver=reviver, type=type, fallback=fallback)
    return _load_sync(locate(reference, options.base), options, [])
