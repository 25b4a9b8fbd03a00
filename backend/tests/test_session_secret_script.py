"""Tests for the identity token secret generator script."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "generate_session_secret.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("generate_session_secret", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_short_secrets_are_refused(script):
    with pytest.raises(ValueError):
        script.generate_secret(16)


def test_env_file_is_updated_in_place(script, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DB_HOST=db\nIDENTITY_TOKEN_SECRET=old\n", encoding="utf-8")

    assert script.main(["--env-file", str(env_file), "--quiet"]) == 0

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "DB_HOST=db"
    assert lines[1].startswith("IDENTITY_TOKEN_SECRET=")
    assert lines[1] != "IDENTITY_TOKEN_SECRET=old"
    assert len(lines) == 2


def test_missing_env_file_is_created(script, tmp_path, capsys):
    env_file = tmp_path / "nested" / ".env"
    assert script.main(["--env-file", str(env_file)]) == 0
    printed = capsys.readouterr().out.strip()
    assert env_file.read_text(encoding="utf-8") == f"IDENTITY_TOKEN_SECRET={printed}\n"
