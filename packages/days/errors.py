"""Exception taxonomy for ``days``.

Library modules raise these; only ``days.cli`` turns them into messages and
exit codes.
"""

from __future__ import annotations


class DaysError(Exception):
    """Base class for every error the tool reports to the user."""


class HomeDirectoryError(DaysError):
    """The user's home directory could not be determined."""


class StoreDirectoryMissingError(DaysError):
    """The backing directory does not exist; the user must create it."""


class StoreOpenError(DaysError):
    """The backing file exists (or should) but could not be opened or read."""


class ConfigError(DaysError):
    """A setting from the environment or `.env` has an invalid value."""


class UsageError(DaysError, ValueError):
    """Missing, conflicting or malformed command arguments."""


class MutationError(DaysError):
    """Appending to or rewriting the backing file failed.

    For rewrites the original file is left untouched when this is raised.
    """


__all__ = [
    "ConfigError",
    "DaysError",
    "HomeDirectoryError",
    "MutationError",
    "StoreDirectoryMissingError",
    "StoreOpenError",
    "UsageError",
]
