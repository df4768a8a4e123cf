import logging
import os
import platform
import shutil
from typing import Callable, Mapping, Optional

from clipbridge.schema import Environment

logger = logging.getLogger(__name__)

CANDIDATE_BINARIES = (
    "wl-copy",
    "wl-paste",
    "xsel",
    "xclip",
    "pbcopy",
    "pbpaste",
    "tmux",
)

SSH_VARIABLES = ("SSH_CONNECTION", "SSH_CLIENT", "SSH_TTY")


def probe(
    environ: Optional[Mapping[str, str]] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
    system: Optional[str] = None,
) -> Environment:
    """Inspect the current process environment and search path.

    Every input can be replaced, which is how the tests drive detection
    without depending on the machine they run on.
    """
    env = os.environ if environ is None else environ

    binaries = {name: which(name) for name in CANDIDATE_BINARIES}

    result = Environment(
        system=system or platform.system(),
        wayland_display=env.get("WAYLAND_DISPLAY") or None,
        display=env.get("DISPLAY") or None,
        tmux=env.get("TMUX") or None,
        ssh=any(env.get(name) for name in SSH_VARIABLES),
        term=env.get("TERM", ""),
        binaries=binaries,
    )

    found = sorted(name for name, path in binaries.items() if path)
    logger.debug(
        "Probed %s: wayland=%s display=%s tmux=%s ssh=%s binaries=%s",
        result.system,
        result.wayland_display,
        result.display,
        bool(result.tmux),
        result.ssh,
        ", ".join(found) or "none",
    )
    return result
