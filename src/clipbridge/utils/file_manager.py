import getpass
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from clipbridge.errors import ClipboardUnavailable

logger = logging.getLogger(__name__)

_NOFOLLOW = getattr(os, "O_NOFOLLOW", 0)


def _user_tag() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return str(os.getuid()) if hasattr(os, "getuid") else "user"


def default_path() -> Path:
    return Path(tempfile.gettempdir()) / f"clipbridge-{_user_tag()}"


class FileManager:
    """Keeps the clipboard in a single file when no clipboard tool exists."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_path()

    def write(self, data: bytes) -> Path:
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | _NOFOLLOW, 0o600)
        except OSError as exc:
            raise ClipboardUnavailable(f"Cannot write clipboard file {self.path}: {exc}") from exc

        with os.fdopen(fd, "wb") as handle:
            # the name is predictable in a shared temp dir, an existing file
            # must be ours and gets its mode reset before any data lands
            self._check_owner(fd)
            try:
                if hasattr(os, "fchmod"):
                    os.fchmod(fd, 0o600)
                os.ftruncate(fd, 0)
                handle.write(data)
                handle.flush()
            except OSError as exc:
                raise ClipboardUnavailable(f"Cannot write clipboard file {self.path}: {exc}") from exc

        logger.debug(f"Saved {len(data)} bytes to {self.path}")
        return self.path

    def read(self) -> bytes:
        if not self.path.exists():
            logger.debug(f"No clipboard file at {self.path}")
            return b""
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise ClipboardUnavailable(f"Cannot read clipboard file {self.path}: {exc}") from exc

    def clear(self) -> bool:
        if not self.path.exists():
            return False
        try:
            self.path.unlink()
        except OSError as exc:
            raise ClipboardUnavailable(f"Cannot remove clipboard file {self.path}: {exc}") from exc
        logger.info(f"Removed clipboard file {self.path}")
        return True

    def _check_owner(self, fd: int) -> None:
        if not hasattr(os, "getuid"):
            return
        owner = os.fstat(fd).st_uid
        if owner != os.getuid():
            raise ClipboardUnavailable(
                f"Refusing to use clipboard file {self.path} owned by uid {owner}"
            )
