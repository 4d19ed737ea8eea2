"""Errors raised by range tables and pipelines."""

from __future__ import annotations


class RangeRemapError(Exception):
    """Base class for every error raised by this package."""


class ChainBroken(RangeRemapError):
    """No route from the current label to the terminal label."""

    def __init__(self, at_label: str, reason: str = "no table maps from this label") -> None:
        self.at_label = at_label
        super().__init__(f"Chain broken at '{at_label}': {reason}")


class LabelMismatch(RangeRemapError):
    """Two tables were composed although they are not adjacent."""

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Cannot compose '{left}' with '{right}': labels are not adjacent")


class MalformedEntry(RangeRemapError, ValueError):
    """A table entry or interval is invalid."""


class AlmanacFormatError(RangeRemapError, ValueError):
    """Almanac text could not be parsed."""
