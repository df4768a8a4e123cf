from abc import ABC, abstractmethod

from clipbridge.schema import ActionKind


class ClipboardBackend(ABC):

    kind: ActionKind

    @abstractmethod
    def copy(self, data: bytes) -> None:
        pass

    @abstractmethod
    def paste(self) -> bytes:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind.value}>"
