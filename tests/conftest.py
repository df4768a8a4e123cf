import sys
from pathlib import Path

import pytest

# Make src importable without an install
REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"
sys.path.insert(0, str(SRC))

from clipbridge.clipboard.probe import CANDIDATE_BINARIES  # noqa: E402
from clipbridge.schema import Environment  # noqa: E402


def fake_which(*available):
    return lambda name: f"/usr/bin/{name}" if name in available else None


def make_env(binaries=(), system="Linux", **fields) -> Environment:
    return Environment(
        system=system,
        binaries={name: fake_which(*binaries)(name) for name in CANDIDATE_BINARIES},
        **fields,
    )


@pytest.fixture
def clean_environ(monkeypatch, tmp_path):
    """Strip CLIPBRIDGE_* settings and keep stray .env files out of reach."""
    for name in (
        "CLIPBRIDGE_BACKEND",
        "CLIPBRIDGE_OSC52",
        "CLIPBRIDGE_TIMEOUT",
        "CLIPBRIDGE_TEMP_FILE",
        "CLIPBRIDGE_VERBOSE",
    ):
        # set-then-delete so values loaded from a .env are rolled back too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
