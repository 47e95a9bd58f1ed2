"""Tests for the environment drift detection script."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from pathlib import Path

import pytest

from scripts import check_env

REQUIRED_ENV_KEYS = ["GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "STORAGE_BACKEND", "DYNAMODB_TABLE_NAME"]


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


@pytest.fixture(autouse=True)
def _clear_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in REQUIRED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.mark.parametrize("command", ["record", "verify", "check", "show"])
def test_main_requires_existing_env_file(tmp_path: Path, command: str) -> None:
    argv = [command, "--env-file", str(tmp_path / ".missing-env")]
    if command in ("record", "verify"):
        argv.extend(["--hash-file", str(tmp_path / ".env.sha256")])

    assert check_env.main(argv) == check_env.EXIT_RUNTIME_ERROR


def test_record_and_verify_detects_rotated_secret(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    hash_file = tmp_path / ".env.sha256"
    _write_env(env_file, GOOGLE_CLIENT_ID="abc", GOOGLE_CLIENT_SECRET="secret")

    argv = ["--env-file", str(env_file), "--hash-file", str(hash_file)]
    assert check_env.main(["record", *argv]) == check_env.EXIT_OK
    assert hash_file.read_text(encoding="utf-8").strip()
    assert check_env.main(["verify", *argv]) == check_env.EXIT_OK

    _write_env(env_file, GOOGLE_CLIENT_ID="abc", GOOGLE_CLIENT_SECRET="rotated")
    monkeypatch.delenv("GOOGLE_CLIENT_SECRET", raising=False)

    assert check_env.main(["verify", *argv]) == check_env.EXIT_CHECKSUM_ERROR


def test_verify_without_baseline_is_runtime_error(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, GOOGLE_CLIENT_ID="abc", GOOGLE_CLIENT_SECRET="secret")

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(tmp_path / "none")]
    )
    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_validation_failure_for_missing_client_secret(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, GOOGLE_CLIENT_ID="abc")

    assert check_env.main(["check", "--env-file", str(env_file)]) == check_env.EXIT_VALIDATION_ERROR


def test_validation_failure_for_dynamodb_without_table(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        GOOGLE_CLIENT_ID="abc",
        GOOGLE_CLIENT_SECRET="secret",
        STORAGE_BACKEND="dynamodb",
    )

    assert check_env.main(["check", "--env-file", str(env_file)]) == check_env.EXIT_VALIDATION_ERROR


def test_show_prints_resolved_settings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, GOOGLE_CLIENT_ID="abc", GOOGLE_CLIENT_SECRET="secret")

    assert check_env.main(["show", "--env-file", str(env_file)]) == check_env.EXIT_OK

    output = capsys.readouterr().out
    assert "client id:         abc" in output
    assert "storage backend:   sqlite" in output
    assert "secret" not in output
