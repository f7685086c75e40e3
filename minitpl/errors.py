"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from MinitplUserError.

Problems inside a template (unknown markers, unbound variables, unclosed
blocks) are not exceptions at all: they are reported as diagnostics and
the template is still rendered.
"""

from __future__ import annotations


class MinitplUserError(Exception):
    """
    Base class for all user-facing errors in minitpl.

    These errors indicate problems that the user can fix:
    missing template files, invalid configuration, strict-mode
    template errors.
    """
    pass


__all__ = ["MinitplUserError"]
