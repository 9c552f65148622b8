from __future__ import annotations

"""Exceptions shared across the trainer."""


class UnavailableError(RuntimeError):
    """The requested value is unavailable.

    Raised when the playback backend cannot be used, or when no valid question
    can be produced under the current configuration.
    """
