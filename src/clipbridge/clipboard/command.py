import logging
import subprocess
from typing import List, Optional

from clipbridge.clipboard.base import ClipboardBackend
from clipbridge.errors import ClipboardCommandError
from clipbridge.schema import Action

logger = logging.getLogger(__name__)


class CommandBackend(ClipboardBackend):
    """Backend that shells out to wl-clipboard, xsel, xclip, pbcopy or tmux."""

    def __init__(self, action: Action, timeout: float = 2.0):
        self.action = action
        self.kind = action.kind
        self.timeout = timeout

    def copy(self, data: bytes) -> None:
        # wl-copy and xclip fork a selection owner that inherits our fds,
        # so nothing here may be a pipe we wait on.
        self._run_command(
            self.action.copy_command,
            input=data,
            stdout=subprocess.DEVNULL,
            stderr=None,
        )

    def paste(self) -> bytes:
        result = self._run_command(
            self.action.paste_command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        return result or b""

    def _run_command(
        self,
        command: List[str],
        input: Optional[bytes] = None,
        stdout=None,
        stderr=None,
    ) -> Optional[bytes]:
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                input=input,
                stdout=stdout,
                stderr=stderr,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            raise ClipboardCommandError(
                command, returncode=exc.returncode, stderr=exc.stderr
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ClipboardCommandError(
                command, reason=f"timed out after {self.timeout:g}s"
            ) from exc
        except OSError as exc:
            raise ClipboardCommandError(command, reason=str(exc)) from exc

        return result.stdout
