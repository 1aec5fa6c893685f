"""Loader error taxonomy.

Only :class:`StartupFailure` ever reaches the user; source errors are
recovered to an empty list inside :class:`~.loader.SourceLoader`.
"""

from __future__ import annotations


class SourceError(Exception):
    """Base class for list source failures."""


class SourceUnavailable(SourceError):
    """Network, timeout, HTTP status or file read failure."""


class UnparseableSource(SourceError):
    """Text could not be decoded by any parse strategy."""


class StartupFailure(RuntimeError):
    """An exception escaped the widget initialization sequence."""
