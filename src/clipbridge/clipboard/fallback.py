from pathlib import Path
from typing import Optional

from clipbridge.clipboard.base import ClipboardBackend
from clipbridge.schema import ActionKind
from clipbridge.utils.file_manager import FileManager


class TempFileBackend(ClipboardBackend):
    """Last resort when no clipboard binary is usable."""

    kind = ActionKind.TEMP_FILE

    def __init__(self, path: Optional[Path] = None):
        self.store = FileManager(path)

    def copy(self, data: bytes) -> None:
        self.store.write(data)

    def paste(self) -> bytes:
        return self.store.read()
