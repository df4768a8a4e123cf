import os
from pathlib import Path

import pytest

from clipbridge.config import ClipBridgeConfig
from clipbridge.schema import ActionKind


def test_defaults():
    config = ClipBridgeConfig.from_env({})
    assert config.backend is None
    assert config.osc52 == "auto"
    assert config.timeout == 2.0
    assert config.temp_file is None
    assert config.verbose is False


def test_values_from_mapping():
    config = ClipBridgeConfig.from_env({
        "CLIPBRIDGE_BACKEND": "Tmux-Buffer",
        "CLIPBRIDGE_OSC52": "yes",
        "CLIPBRIDGE_TIMEOUT": "0.5",
        "CLIPBRIDGE_TEMP_FILE": "/var/tmp/clip",
        "CLIPBRIDGE_VERBOSE": "on",
    })
    assert config.backend is ActionKind.TMUX_BUFFER
    assert config.osc52 == "always"
    assert config.timeout == 0.5
    assert config.temp_file == Path("/var/tmp/clip")
    assert config.verbose is True


@pytest.mark.parametrize("value, expected", [("", "auto"), ("never", "never"), ("0", "never"), ("ALWAYS", "always")])
def test_osc52_modes(value, expected):
    assert ClipBridgeConfig.from_env({"CLIPBRIDGE_OSC52": value}).osc52 == expected


@pytest.mark.parametrize(
    "name, value",
    [
        ("CLIPBRIDGE_BACKEND", "xerox"),
        ("CLIPBRIDGE_OSC52", "sometimes"),
        ("CLIPBRIDGE_TIMEOUT", "soon"),
        ("CLIPBRIDGE_TIMEOUT", "-1"),
    ],
)
def test_invalid_values(name, value):
    with pytest.raises(ValueError):
        ClipBridgeConfig.from_env({name: value})


def test_dotenv_file(clean_environ):
    env_file = clean_environ / ".env"
    env_file.write_text("CLIPBRIDGE_BACKEND=macos\nCLIPBRIDGE_TIMEOUT=4\n")

    config = ClipBridgeConfig.from_env(env_path=env_file)
    assert config.backend is ActionKind.MACOS
    assert config.timeout == 4.0


def test_dotenv_found_in_working_directory(clean_environ):
    (clean_environ / ".env").write_text("CLIPBRIDGE_OSC52=never\n")
    assert ClipBridgeConfig.from_env().osc52 == "never"


def test_environment_wins_over_dotenv(clean_environ, monkeypatch):
    (clean_environ / ".env").write_text("CLIPBRIDGE_TIMEOUT=4\n")
    monkeypatch.setenv("CLIPBRIDGE_TIMEOUT", "9")

    assert ClipBridgeConfig.from_env().timeout == 9.0
    assert os.environ["CLIPBRIDGE_TIMEOUT"] == "9"


def test_dotenv_in_parent_directory_is_ignored(clean_environ, monkeypatch):
    (clean_environ / ".env").write_text("CLIPBRIDGE_BACKEND=macos\n")
    nested = clean_environ / "project"
    nested.mkdir()
    monkeypatch.chdir(nested)

    assert ClipBridgeConfig.from_env().backend is None
