"""Options shared by load() and load_sync()."""

import os
from dataclasses import dataclass

from .pipeline import Reviver
from .pipeline import Validator
from .strategies import DEFAULT_TYPE


@dataclass(frozen=True)
class LoadOptions:
    """Options for one load call, reused unchanged for fallback retries.

    Attributes:
        base: URL or absolute path relative references are joined onto,
            instead of the calling module (a file such as __file__, or a
            directory)
        validate: Called with the loaded value; raising rejects it
        reviver: (key, value) transform applied while parsing
        type: Declared document type; only "json" can be read from disk
        fallback: Reference loaded instead when every strategy failed
    """

    base: str | os.PathLike | None = None
    validate: Validator | None = None
    reviver: Reviver | None = None
    type: str = DEFAULT_TYPE
    fallback: str | os.PathLike | None = None
