"""OSC 52 clipboard support for remote sessions.

The terminal emulator on the user's side decodes the sequence and sets its
own clipboard, so this works over SSH without any local clipboard tool.

Format: ESC ] 52 ; <target> ; <base64 data> BEL

Inside tmux the sequence must be wrapped in a DCS passthrough with every ESC
doubled, otherwise tmux swallows it:

    ESC P tmux ; <escaped sequence> ESC \\

tmux 3.3+ also needs ``set -g allow-passthrough on``.
"""

import base64
import logging
import sys
from typing import Optional, TextIO

from clipbridge.clipboard.base import ClipboardBackend
from clipbridge.errors import ClipboardUnavailable
from clipbridge.schema import ActionKind

logger = logging.getLogger(__name__)

ESC = "\x1b"
BEL = "\x07"

# Several terminals (notably older xterm and hterm) refuse longer payloads.
OSC52_MAX_BYTES = 74994

TTY_PATH = "/dev/tty"


def _truncate(data: bytes, limit: int) -> bytes:
    if len(data) <= limit:
        return data
    # back up to the start of a UTF-8 character
    while limit > 0 and (data[limit] & 0xC0) == 0x80:
        limit -= 1
    return data[:limit]


def encode(data: bytes, tmux: bool = False, target: str = "c") -> str:
    payload = base64.b64encode(data).decode("ascii")

    if len(payload) > OSC52_MAX_BYTES:
        original = len(data)
        data = _truncate(data, (OSC52_MAX_BYTES // 4) * 3)
        logger.warning(
            "OSC 52 payload too large, truncated to %d of %d bytes",
            len(data),
            original,
        )
        payload = base64.b64encode(data).decode("ascii")

    sequence = f"{ESC}]52;{target};{payload}{BEL}"
    if tmux:
        escaped = sequence.replace(ESC, ESC + ESC)
        return f"{ESC}Ptmux;{escaped}{ESC}\\"
    return sequence


def emit(data: bytes, tmux: bool = False, stream: Optional[TextIO] = None) -> None:
    sequence = encode(data, tmux=tmux)

    if stream is not None:
        stream.write(sequence)
        stream.flush()
        return

    # stdout may be redirected, the controlling terminal is what must see this
    try:
        with open(TTY_PATH, "w") as tty:
            tty.write(sequence)
            tty.flush()
    except OSError:
        logger.debug("Cannot open %s, writing OSC 52 to stderr", TTY_PATH)
        sys.stderr.write(sequence)
        sys.stderr.flush()


class OSC52Backend(ClipboardBackend):

    def __init__(self, tmux: bool = False, stream: Optional[TextIO] = None):
        self.kind = ActionKind.OSC52_TMUX if tmux else ActionKind.OSC52
        self.tmux = tmux
        self.stream = stream

    def copy(self, data: bytes) -> None:
        emit(data, tmux=self.tmux, stream=self.stream)

    def paste(self) -> bytes:
        raise ClipboardUnavailable("OSC 52 can only copy, reading the terminal clipboard is not supported")
