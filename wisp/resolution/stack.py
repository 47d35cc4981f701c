"""Call stack sampling.

Frames are enumerated straight from the interpreter, so no process-wide
traceback formatting state is involved; the cutoff is a plain argument.
"""

import inspect
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CallFrame:
    """One entry of a sampled call stack.

    Attributes:
        location: Source file of the frame (None when the code has no file)
        index: Position in the sample, 0 being the deepest frame
        function: Name of the code object running in the frame
        lineno: Line being executed
    """

    location: str | None
    index: int
    function: str = ""
    lineno: int = 0


def sample(skip_below: Callable[..., Any] | None = None) -> list[CallFrame]:
    """Sample the active call stack, deepest frame first.

    The sampler's own frame is never included. When skip_below is given,
    the most recent frame running that function is dropped together with
    every frame it called; if no frame runs it, nothing extra is dropped.

    Args:
        skip_below: Function whose frame marks the cutoff

    Returns:
        Fresh list of CallFrame records
    """
    current = inspect.currentframe()
    if current is None:  # interpreters without frame support
        return []

    raw = [frame for frame, _ in traceback.walk_stack(current.f_back)]
    del current

    if skip_below is not None:
        code = inspect.unwrap(skip_below).__code__
        for position, frame in enumerate(raw):
            if frame.f_code is code:
                raw = raw[position + 1 :]
                break

    return [
        CallFrame(
            location=frame.f_code.co_filename or None,
            index=index,
            function=frame.f_code.co_name,
            lineno=frame.f_lineno or 0,
        )
        for index, frame in enumerate(raw)
    ]
