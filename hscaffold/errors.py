"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from ScaffoldUserError.

Programming errors and bugs should NOT inherit from ScaffoldUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class ScaffoldUserError(Exception):
    """
    Base class for all user-facing errors in hashira-scaffold.

    These errors indicate problems that the user can fix:
    malformed templates, missing context values, unknown backends, etc.
    """
    pass


__all__ = ["ScaffoldUserError"]
