#!/usr/bin/env python3

import argparse
import dataclasses
import logging
import os
import sys
from typing import List, Optional

from clipbridge import __version__
from clipbridge.clipboard import probe, select_action
from clipbridge.config import ClipBridgeConfig
from clipbridge.errors import ClipboardError
from clipbridge.schema import ActionKind, Environment
from clipbridge.services.clipboard_service import (
    COPY,
    PASTE,
    ClipboardService,
    resolve_remote,
)
from clipbridge.utils.file_manager import FileManager

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="clipbridge",
        description=(
            "Copy stdin to the clipboard, or paste the clipboard to stdout "
            "when stdin is a terminal"
        ),
    )

    direction = parser.add_mutually_exclusive_group()
    direction.add_argument(
        "-c", "--copy",
        dest="mode",
        action="store_const",
        const=COPY,
        help="Copy stdin even if it is a terminal"
    )
    direction.add_argument(
        "-p", "--paste",
        dest="mode",
        action="store_const",
        const=PASTE,
        help="Paste to stdout even if stdin is not a terminal"
    )

    parser.add_argument(
        "-b", "--backend",
        choices=[kind.value for kind in ActionKind],
        default=None,
        help="Skip detection and use this backend (default: $CLIPBRIDGE_BACKEND or auto)"
    )

    osc = parser.add_mutually_exclusive_group()
    osc.add_argument(
        "--osc52",
        dest="osc52",
        action="store_const",
        const="always",
        help="Also emit an OSC 52 sequence on copy, even outside SSH"
    )
    osc.add_argument(
        "--no-osc52",
        dest="osc52",
        action="store_const",
        const="never",
        help="Never emit an OSC 52 sequence"
    )

    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Show the detected environment and selected backend, then exit"
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove the temp-file clipboard"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def doctor(env: Environment, config: ClipBridgeConfig, backend: Optional[ActionKind] = None) -> None:
    print(f"system:          {env.system}")
    print(f"WAYLAND_DISPLAY: {env.wayland_display or '-'}")
    print(f"DISPLAY:         {env.display or '-'}")
    print(f"TMUX:            {env.tmux or '-'}")
    print(f"TERM:            {env.term or '-'}")
    print(f"remote session:  {'yes' if env.ssh else 'no'}")
    for name, path in env.binaries.items():
        print(f"  {name:<9} {path or 'not found'}")

    try:
        action = select_action(env, forced=backend or config.backend)
    except ClipboardError as exc:
        print(f"backend:         unavailable ({exc})")
    else:
        print(f"backend:         {action.kind.value}")
        if action.copy_command:
            print(f"  copy:  {' '.join(action.copy_command)}")
            print(f"  paste: {' '.join(action.paste_command)}")

    remote = resolve_remote(env, config.osc52)
    print(f"osc52:           {remote.value if remote else 'off'} ({config.osc52})")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    try:
        config = ClipBridgeConfig.from_env()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.verbose or config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.osc52:
        config = dataclasses.replace(config, osc52=args.osc52)

    backend = ActionKind(args.backend) if args.backend else None

    try:
        if args.clear:
            FileManager(config.temp_file).clear()
            return 0

        env = probe()

        if args.doctor:
            doctor(env, config, backend)
            return 0

        service = ClipboardService.from_environment(env, config, backend=backend)
        service.run(mode=args.mode)
    except ClipboardError as e:
        logger.error(str(e))
        return 1
    except BrokenPipeError:
        # reader went away (e.g. `clipbridge | head`), keep the exit flush quiet
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
