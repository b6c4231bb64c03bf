"""Reporting channel for internal defects.

Some conditions cannot happen when the calling layer is correct: a range
built from a handle no file owns, a converter created without a file, a
converter that does not match the file being resolved. These are not bad
input. They are bugs upstream, and are reported here in addition to the
ordinary error the operation raises.

A report logs on the ``srcspan.bug`` logger at the configured level, keeps
the first exemplar for each call site, and notifies registered handlers.

Example:
    >>> from srcspan import bug
    >>> bug.add_handler(lambda b: print(b.key))
    >>> raise bug.error("missing file association")

"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Callable
from dataclasses import dataclass

from srcspan.config import get_span_config
from srcspan.errors import InternalInconsistencyError
from srcspan.utils.logger import get_logger

logger = get_logger("bug")


@dataclass(frozen=True, slots=True)
class Bug:
    """A reported defect and where it was reported from."""

    file: str
    line: int
    description: str
    stack: str

    @property
    def key(self) -> str:
        """Call site identifier, ``file:line``."""
        return f"{self.file}:{self.line}"


_exemplars: dict[str, Bug] = {}
_handlers: list[Callable[[Bug], None]] = []


def report(description: str, *, stacklevel: int = 1) -> Bug:
    """Report an internal defect.

    Args:
        description: What went wrong
        stacklevel: Frames to skip to find the reporting call site
            (1 is the direct caller of ``report``)

    Returns:
        The recorded Bug

    """
    frame = sys._getframe(stacklevel)
    stack = "".join(traceback.format_stack(frame))
    found = Bug(
        file=frame.f_code.co_filename,
        line=frame.f_lineno,
        description=description,
        stack=stack,
    )

    config = get_span_config()
    logger.log(
        config.bug_log_level,
        "internal error: %s (at %s)",
        description,
        found.key,
        stacklevel=stacklevel + 1,
    )
    if config.record_bugs:
        _exemplars.setdefault(found.key, found)
    for handler in list(_handlers):
        handler(found)
    return found


def error(
    description: str,
    cls: type[InternalInconsistencyError] = InternalInconsistencyError,
) -> InternalInconsistencyError:
    """Report a defect and return the matching exception for the caller to raise.

    Example:
        >>> if file is None:
        ...     raise bug.error("missing file association", MissingFileAssociationError)

    """
    report(description, stacklevel=2)
    return cls(description)


def add_handler(handler: Callable[[Bug], None]) -> None:
    """Call ``handler`` with every subsequently reported Bug."""
    _handlers.append(handler)


def remove_handler(handler: Callable[[Bug], None]) -> None:
    """Stop notifying ``handler``. Unknown handlers are ignored."""
    if handler in _handlers:
        _handlers.remove(handler)


def reported() -> dict[str, Bug]:
    """Snapshot of the first Bug recorded for each call site."""
    return dict(_exemplars)


def clear() -> None:
    """Forget recorded exemplars."""
    _exemplars.clear()


__all__ = [
    "Bug",
    "add_handler",
    "clear",
    "error",
    "remove_handler",
    "report",
    "reported",
]
