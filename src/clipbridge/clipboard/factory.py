import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from clipbridge.clipboard.base import ClipboardBackend
from clipbridge.clipboard.command import CommandBackend
from clipbridge.clipboard.fallback import TempFileBackend
from clipbridge.clipboard.osc52 import OSC52Backend
from clipbridge.errors import ClipboardUnavailable
from clipbridge.schema import Action, ActionKind, Environment

logger = logging.getLogger(__name__)

COMMANDS: Dict[ActionKind, Tuple[List[str], List[str]]] = {
    ActionKind.WAYLAND: (["wl-copy"], ["wl-paste", "--no-newline"]),
    ActionKind.X11_XSEL: (
        ["xsel", "--clipboard", "--input"],
        ["xsel", "--clipboard", "--output"],
    ),
    ActionKind.X11_XCLIP: (
        ["xclip", "-selection", "clipboard", "-in"],
        ["xclip", "-selection", "clipboard", "-out"],
    ),
    ActionKind.MACOS: (["pbcopy"], ["pbpaste"]),
    ActionKind.TMUX_BUFFER: (["tmux", "load-buffer", "-"], ["tmux", "save-buffer", "-"]),
}

REQUIRED_BINARIES: Dict[ActionKind, Tuple[str, ...]] = {
    ActionKind.WAYLAND: ("wl-copy", "wl-paste"),
    ActionKind.X11_XSEL: ("xsel",),
    ActionKind.X11_XCLIP: ("xclip",),
    ActionKind.MACOS: ("pbcopy", "pbpaste"),
    ActionKind.TMUX_BUFFER: ("tmux",),
}


def _applies(kind: ActionKind, env: Environment) -> bool:
    if not env.has(*REQUIRED_BINARIES[kind]):
        return False
    if kind is ActionKind.WAYLAND:
        return bool(env.wayland_display)
    if kind in (ActionKind.X11_XSEL, ActionKind.X11_XCLIP):
        return bool(env.display)
    if kind is ActionKind.MACOS:
        return env.system == "Darwin"
    if kind is ActionKind.TMUX_BUFFER:
        return bool(env.tmux)
    return False


def make_action(kind: ActionKind) -> Action:
    copy_command, paste_command = COMMANDS.get(kind, ([], []))
    return Action(kind=kind, copy_command=copy_command, paste_command=paste_command)


def select_action(env: Environment, forced: Optional[ActionKind] = None) -> Action:
    """Pick the local clipboard action, first match wins.

    Order: Wayland, X11 via xsel, X11 via xclip, macOS, tmux buffer, temp file.
    A forced kind skips detection but still needs its binaries on the path.
    """
    if forced is not None:
        missing = [name for name in REQUIRED_BINARIES.get(forced, ()) if not env.binaries.get(name)]
        if missing:
            raise ClipboardUnavailable(
                f"Backend {forced.value} needs {', '.join(missing)} on PATH"
            )
        logger.debug(f"Using forced backend {forced.value}")
        return make_action(forced)

    for kind in COMMANDS:
        if _applies(kind, env):
            logger.debug(f"Selected backend {kind.value}")
            return make_action(kind)

    logger.debug("No clipboard tool found, falling back to temp file")
    return make_action(ActionKind.TEMP_FILE)


def select_remote(env: Environment) -> Optional[ActionKind]:
    if not env.ssh:
        return None
    return ActionKind.OSC52_TMUX if env.tmux else ActionKind.OSC52


def get_backend(
    action: Action,
    timeout: float = 2.0,
    temp_file: Optional[Path] = None,
) -> ClipboardBackend:
    if action.kind is ActionKind.TEMP_FILE:
        return TempFileBackend(temp_file)
    if action.kind.is_osc52:
        return OSC52Backend(tmux=action.kind is ActionKind.OSC52_TMUX)
    return CommandBackend(action, timeout=timeout)
