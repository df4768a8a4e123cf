from typing import Optional, Sequence


class ClipboardError(Exception):
    """Base class for everything the bridge reports as a failed copy or paste."""


class ClipboardUnavailable(ClipboardError):
    pass


class ClipboardCommandError(ClipboardError):

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: Optional[bytes] = None,
        reason: Optional[str] = None,
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr or b""
        self.reason = reason
        super().__init__(self._describe())

    def _describe(self) -> str:
        name = self.command[0] if self.command else "<empty>"
        if self.reason:
            return f"{name}: {self.reason}"

        message = f"{name} exited with status {self.returncode}"
        detail = self.stderr.decode("utf-8", errors="ignore").strip()
        if detail:
            message = f"{message}: {detail}"
        return message
