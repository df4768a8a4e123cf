from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from clipbridge.schema import ActionKind

OSC52_MODES = ("auto", "always", "never")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _load_env_file(env_path: Optional[Path] = None) -> None:
    # real environment variables always win over the file
    if env_path is not None:
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=False)
        return

    local = Path.cwd() / ".env"
    if local.exists():
        load_dotenv(dotenv_path=local, override=False)


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in _TRUE


def _parse_backend(value: Optional[str]) -> Optional[ActionKind]:
    if not value or not value.strip():
        return None
    try:
        return ActionKind(value.strip().lower())
    except ValueError:
        choices = ", ".join(kind.value for kind in ActionKind)
        raise ValueError(f"Unknown backend {value!r}, expected one of: {choices}") from None


def _parse_osc52(value: Optional[str]) -> str:
    if value is None:
        return "auto"
    lowered = value.strip().lower()
    if lowered in ("", "auto"):
        return "auto"
    if lowered == "always" or lowered in _TRUE:
        return "always"
    if lowered == "never" or lowered in _FALSE:
        return "never"
    raise ValueError(f"Invalid CLIPBRIDGE_OSC52 value {value!r}, expected auto, always or never")


def _parse_timeout(value: Optional[str]) -> float:
    if value is None or not value.strip():
        return ClipBridgeConfig.timeout
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"Invalid CLIPBRIDGE_TIMEOUT value {value!r}") from None
    if timeout <= 0:
        raise ValueError(f"CLIPBRIDGE_TIMEOUT must be positive, got {value!r}")
    return timeout


@dataclass(frozen=True)
class ClipBridgeConfig:
    backend: Optional[ActionKind] = None
    osc52: str = "auto"
    timeout: float = 2.0
    temp_file: Optional[Path] = None
    verbose: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        env_path: Optional[Path] = None,
    ) -> "ClipBridgeConfig":
        """Build the config from CLIPBRIDGE_* variables.

        A ``.env`` file is only consulted when reading the real process
        environment, never for an explicit ``environ`` mapping.
        """
        if environ is None:
            _load_env_file(env_path)
            environ = os.environ

        temp_file = environ.get("CLIPBRIDGE_TEMP_FILE") or None

        return cls(
            backend=_parse_backend(environ.get("CLIPBRIDGE_BACKEND")),
            osc52=_parse_osc52(environ.get("CLIPBRIDGE_OSC52")),
            timeout=_parse_timeout(environ.get("CLIPBRIDGE_TIMEOUT")),
            temp_file=Path(temp_file).expanduser() if temp_file else None,
            verbose=_to_bool(environ.get("CLIPBRIDGE_VERBOSE")),
        )
