# Python library to load and save 3MF packages.
# Copyright (C) 2020 Ghostkeeper
# Copyright (C) 2025 Jack (modernization for Blender 4.2+)
# This library is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This library is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Logging utilities for the 3MF package library.

All console output goes through the functions here rather than through
``import logging``, so scripts embedding this library see the same plain
``WARNING:`` / ``ERROR:`` lines no matter how their own logging is set up.

Usage::

    from ..common import debug, warn, error

    debug(f"Resolved model at {path}")   # Silent unless DEBUG_MODE is True
    warn(f"{path} file missing!")        # Always prints  WARNING: ...
    error(f"Failed to write: {e}")       # Always prints  ERROR: ...
"""

__all__ = ["DEBUG_MODE", "debug", "warn", "error", "safe_report"]


DEBUG_MODE = False
"""Set to True to enable verbose console output for development/debugging."""


def debug(*args, **kwargs):
    """Print to console only when DEBUG_MODE is enabled."""
    if DEBUG_MODE:
        print(*args, **kwargs)


def warn(*args, **kwargs):
    """Always print a warning message to the console."""
    print("WARNING:", *args, **kwargs)


def error(*args, **kwargs):
    """Always print an error message to the console."""
    print("ERROR:", *args, **kwargs)


def safe_report(reporter, level, message):
    """Report a message to a caller-supplied reporter, with console fallback.

    A reporter is anything with a ``report(level, message)`` method, such as
    the result objects of :mod:`threemf_io.api`.  Passing ``None`` (or an
    object whose ``report()`` fails) prints to the console instead.

    :param reporter: An object with a ``report()`` method, or ``None``.
    :param level: Report level set, e.g. ``{'INFO'}``, ``{'WARNING'}``, ``{'ERROR'}``.
    :param message: The message string.
    """
    try:
        reporter.report(level, message)
    except Exception:
        # No reporter, or one that cannot take the message.
        if "ERROR" in level:
            error(message)
        elif "WARNING" in level:
            warn(message)
        else:
            debug(message)
