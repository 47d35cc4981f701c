"""Error types raised by wisp.

Every error carries the fixed ``wisp: `` prefix in its string form so that
failures raised by the loader can be told apart from errors raised by the
caller's own code.
"""

ERROR_PREFIX = "wisp"


class WispError(Exception):
    """Base class for all wisp errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"{ERROR_PREFIX}: {message}")


class ReferenceTypeError(WispError, TypeError):
    """Raised when a reference is not a string."""

    def __init__(self, reference: object):
        self.reference = reference
        super().__init__(f"reference must be a string, got {type(reference).__name__}")


class InvalidReferenceError(WispError, ValueError):
    """Raised when a URL reference cannot be mapped to a filesystem path."""


class DocumentValidationError(WispError):
    """Raised when the caller's validate function rejects a document."""


class DocumentLoadError(WispError):
    """Raised when every loading strategy failed for a document and for any fallback."""

    def __init__(self, message: str, location: str):
        self.location = location
        super().__init__(message)


class UnsupportedTypeError(DocumentLoadError):
    """Raised when a non-JSON declared type was not accepted by any strategy."""

    def __init__(self, declared_type: str, location: str):
        self.declared_type = declared_type
        super().__init__(f"Unsupported type '{declared_type}' or failed to load module at {location}", location)


class FallbackCycleError(DocumentLoadError):
    """Raised when a failing fallback chain comes back to a location it already tried."""
