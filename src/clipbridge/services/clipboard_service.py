import logging
import sys
from typing import BinaryIO, List, Optional

from clipbridge.clipboard import osc52
from clipbridge.clipboard.base import ClipboardBackend
from clipbridge.clipboard.factory import get_backend, select_action, select_remote
from clipbridge.config import ClipBridgeConfig
from clipbridge.schema import ActionKind, Environment

logger = logging.getLogger(__name__)

COPY = "copy"
PASTE = "paste"


def resolve_remote(env: Environment, mode: str = "auto") -> Optional[ActionKind]:
    if mode == "never":
        return None
    if mode == "always":
        return ActionKind.OSC52_TMUX if env.tmux else ActionKind.OSC52
    return select_remote(env)


class ClipboardService:
    """Moves bytes between standard streams and the selected clipboard.

    ``remote`` is an OSC 52 kind that is layered on top of every copy, so a
    user on the far end of an SSH session gets the text in their local
    clipboard as well.
    """

    def __init__(
        self,
        backend: ClipboardBackend,
        remote: Optional[ActionKind] = None,
    ) -> None:
        self.backend = backend
        # never emit the same escape sequence twice
        self.remote = None if backend.kind.is_osc52 else remote

    @classmethod
    def from_environment(
        cls,
        env: Environment,
        config: Optional[ClipBridgeConfig] = None,
        backend: Optional[ActionKind] = None,
    ) -> "ClipboardService":
        config = config or ClipBridgeConfig()
        action = select_action(env, forced=backend or config.backend)
        return cls(
            get_backend(action, timeout=config.timeout, temp_file=config.temp_file),
            remote=resolve_remote(env, config.osc52),
        )

    @property
    def kinds(self) -> List[ActionKind]:
        used = [self.backend.kind]
        if self.remote is not None:
            used.append(self.remote)
        return used

    def copy(self, data: bytes) -> List[ActionKind]:
        if self.remote is not None:
            osc52.emit(data, tmux=self.remote is ActionKind.OSC52_TMUX)
        self.backend.copy(data)
        logger.info(
            f"Copied {len(data)} bytes via {', '.join(kind.value for kind in self.kinds)}"
        )
        return self.kinds

    def paste(self) -> bytes:
        data = self.backend.paste()
        logger.info(f"Pasted {len(data)} bytes via {self.backend.kind.value}")
        return data

    def run(
        self,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        mode: Optional[str] = None,
    ) -> str:
        """Copy stdin, or paste to stdout when stdin is a terminal.

        Returns the direction that was taken.
        """
        stdin = stdin if stdin is not None else sys.stdin.buffer
        stdout = stdout if stdout is not None else sys.stdout.buffer

        if mode is None:
            mode = PASTE if stdin.isatty() else COPY

        if mode == PASTE:
            stdout.write(self.paste())
            stdout.flush()
        elif mode == COPY:
            self.copy(stdin.read())
        else:
            raise ValueError(f"Unknown mode {mode!r}")
        return mode
