"""Runtime settings for ``days``.

Resolution order for the data directory:

1. an explicit ``data_dir`` argument (the CLI's ``--data-dir``);
2. the ``DAYS_HOME`` environment variable (a local ``.env`` is loaded by the
   CLI before settings are built);
3. ``~/.days`` under the user's home directory.

The directory is never created here; :mod:`days.store` reports it missing so
the user creates it deliberately.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError, HomeDirectoryError
from .logging_setup import level_from_name

EVENTS_FILENAME = "events.csv"
_DEFAULT_DIRNAME = ".days"


class Settings(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    data_dir: Path
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        s = v.strip().upper() or "WARNING"
        if level_from_name(s) is None:
            raise ValueError(f"unknown log level {v!r}; use a name like INFO or a number")
        return s

    @property
    def events_path(self) -> Path:
        return self.data_dir / EVENTS_FILENAME


def _home_dir() -> Path:
    # HOME first, then USERPROFILE for Windows shells, then the platform lookup.
    for var in ("HOME", "USERPROFILE"):
        val = os.getenv(var)
        if val and val.strip():
            return Path(val).expanduser()
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError("Unable to determine home directory") from e


def load_settings(*, data_dir: Path | None = None) -> Settings:
    """Build :class:`Settings` from arguments and the environment."""

    if data_dir is None:
        env_dir = os.getenv("DAYS_HOME")
        if env_dir and env_dir.strip():
            data_dir = Path(env_dir.strip()).expanduser()
        else:
            data_dir = _home_dir() / _DEFAULT_DIRNAME

    try:
        return Settings(
            data_dir=Path(data_dir),
            log_level=os.getenv("DAYS_LOG_LEVEL") or "WARNING",
        )
    except ValidationError as e:
        err = e.errors()[0]
        where = ".".join(str(p) for p in err.get("loc", ()))
        raise ConfigError(f"invalid setting {where}: {err.get('msg', e)}") from e


__all__ = ["EVENTS_FILENAME", "Settings", "load_settings"]
