from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActionKind(str, Enum):
    WAYLAND = "wayland"
    X11_XSEL = "x11-xsel"
    X11_XCLIP = "x11-xclip"
    MACOS = "macos"
    TMUX_BUFFER = "tmux-buffer"
    TEMP_FILE = "temp-file"
    OSC52 = "osc52"
    OSC52_TMUX = "osc52-tmux"

    @property
    def is_osc52(self) -> bool:
        return self in (ActionKind.OSC52, ActionKind.OSC52_TMUX)


class Environment(BaseModel):  # result of a single probe, never mutated
    model_config = ConfigDict(frozen=True)

    system: str
    wayland_display: Optional[str] = None
    display: Optional[str] = None
    tmux: Optional[str] = None
    ssh: bool = False
    term: str = ""
    binaries: Dict[str, Optional[str]] = Field(default_factory=dict)

    def has(self, *names: str) -> bool:
        return all(self.binaries.get(name) for name in names)


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    copy_command: List[str] = Field(default_factory=list)  # empty for in-process kinds
    paste_command: List[str] = Field(default_factory=list)
