"""Verify that the server's environment configuration is complete and unchanged.

Subcommands:

``check``
    Load ``AppSettings`` from the given ``.env`` file and report missing or
    malformed entries (e.g. a dynamodb backend without a table name).
``record``
    ``check``, then write the SHA-256 checksum of the ``.env`` file.
``verify``
    ``check``, then compare the checksum with the recorded one so an unexpected
    edit (for example a rotated client secret) is noticed before a restart.
``show``
    ``check``, then print the resolved non-secret settings.

Example::

    python -m scripts.check_env record --env-file /srv/copypaste/.env \
        --hash-file /srv/copypaste/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path

from pydantic import ValidationError

from copypaste.core.config import AppSettings, load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5

_CHECKSUM_COMMANDS = ("record", "verify")


def _checksum(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _load_settings(env_file: Path) -> AppSettings:
    if not env_file.exists():
        raise FileNotFoundError(f"Environment file {env_file} does not exist.")
    load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _record(env_file: Path, hash_file: Path) -> int:
    checksum = _checksum(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum {checksum} to {hash_file}")
    return EXIT_OK


def _verify(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Checksum file {hash_file} is missing; run 'record' first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _checksum(env_file)
    if expected != actual:
        print(
            f"Environment checksum mismatch (expected {expected}, found {actual}).",
            file=sys.stderr,
        )
        return EXIT_CHECKSUM_ERROR

    print("Environment checksum OK.")
    return EXIT_OK


def _show(settings: AppSettings) -> int:
    print(f"environment:       {settings.environment}")
    print(f"application name:  {settings.google.application_name}")
    print(f"client id:         {settings.google.client_id}")
    print(f"expected audience: {settings.google.expected_audience}")
    print(f"session cookie:    {settings.session.cookie_name}")
    print(f"storage backend:   {settings.storage.backend}")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate server settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command in ("check", "record", "verify", "show"):
        subparser = subparsers.add_parser(command)
        subparser.add_argument(
            "--env-file",
            default=Path(".env"),
            type=Path,
            help="Path to the environment file (default: ./.env).",
        )
        if command in _CHECKSUM_COMMANDS:
            subparser.add_argument("--hash-file", required=True, type=Path)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    try:
        settings = _load_settings(env_file)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValidationError as exc:
        print(f"Settings validation failed:\n{exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if args.command == "record":
        return _record(env_file, args.hash_file)
    if args.command == "verify":
        return _verify(env_file, args.hash_file)
    if args.command == "show":
        return _show(settings)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
