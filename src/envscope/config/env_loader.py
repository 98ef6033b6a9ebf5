"""Process-settings loader with optional .env support.

Process settings are the process-level name source and the override layer.
They are loaded in deterministic order:
1) .env file (if provided and exists)
2) Explicit settings (highest precedence, e.g. ``-D key=value`` on the CLI)

OS environment variables are a separate, higher-precedence name source and
are deliberately not merged in here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from dotenv import dotenv_values


class EnvLoader:
    """Load process settings from a dotenv file plus explicit values."""

    def __init__(self, env_file: Optional[Path | str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None

    def load(self, settings: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
        """Load process settings.

        Precedence (low -> high): .env file, explicit settings.
        Keys whose value is missing in the file (``KEY`` with no ``=``) are skipped.
        """
        data: MutableMapping[str, str] = {}

        if self.env_file is not None and self.env_file.exists():
            file_values = dotenv_values(self.env_file)
            data.update({k: v for k, v in file_values.items() if v is not None})

        if settings:
            data.update({k: str(v) for k, v in settings.items()})

        return data


__all__ = ["EnvLoader"]
