"""Post-load value pipeline: revive, copy, validate."""

import copy
import json
from collections.abc import Callable
from typing import Any

from ..errors import DocumentValidationError
from ..utils.error_format import format_error_message

Reviver = Callable[[str | int, Any], Any]
Validator = Callable[[Any], Any]


class _Omit:
    def __repr__(self) -> str:
        return "OMIT"


# Returned by a reviver to drop the member (or array item) it was called for
OMIT = _Omit()


def revive(value: Any, reviver: Reviver) -> Any:
    """Apply a reviver to a freshly parsed JSON value, bottom up.

    Object members are visited with their key, array items with their
    index, and the root last with the key "". A reviver returning OMIT
    removes the member; OMIT at the root yields None. The value is
    modified in place.
    """

    def walk(key: str | int, node: Any) -> Any:
        if isinstance(node, dict):
            for member in list(node):
                revived = walk(member, node[member])
                if revived is OMIT:
                    del node[member]
                else:
                    node[member] = revived
        elif isinstance(node, list):
            node[:] = [item for item in (walk(i, v) for i, v in enumerate(node)) if item is not OMIT]
        return reviver(key, node)

    result = walk("", value)
    return None if result is OMIT else result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads(text: str) -> Any:
    """Parse strict JSON: NaN, Infinity and -Infinity are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_json(text: str, reviver: Reviver | None = None) -> Any:
    """Parse JSON text, running the reviver over the result when given."""
    value = loads(text)
    if reviver is None:
        return value
    return revive(value, reviver)


def apply_reviver(value: Any, reviver: Reviver | None) -> Any:
    """Re-serialize and re-parse a value through a reviver.

    Values obtained through the module system were parsed without the
    reviver; going through text again gives the reviver exactly the view
    it would have had when parsing the raw file.
    """
    if reviver is None:
        return value
    return parse_json(json.dumps(value), reviver)


def finish(value: Any, validate: Validator | None = None) -> Any:
    """Produce the caller's private copy of a document and validate it.

    copy.deepcopy keeps values a reviver produced (dates, decimals, custom
    objects) intact; nothing is dropped on the way out.

    Raises:
        DocumentValidationError: validate raised; the message is
            "wisp: <original message>"
    """
    value = copy.deepcopy(value)
    if validate is not None:
        try:
            validate(value)
        except Exception as e:
            raise DocumentValidationError(format_error_message(e, include_type=False)) from e
    return value
