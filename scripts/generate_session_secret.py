#!/usr/bin/env python3
"""Generate the shared secret used to verify identity-provider tokens for Hearth."""

from __future__ import annotations

import argparse
import os
import secrets
import sys
from pathlib import Path

DEFAULT_BYTE_LENGTH = 48
ENV_VAR_NAME = "IDENTITY_TOKEN_SECRET"


def generate_secret(byte_length: int = DEFAULT_BYTE_LENGTH) -> str:
    if byte_length < 32:
        raise ValueError(f"byte length must be at least 32 for HS256 (got {byte_length})")
    return secrets.token_urlsafe(byte_length)


def write_secret(path: Path, secret: str, name: str = ENV_VAR_NAME) -> bool:
    """Set ``name`` in an env file, keeping every other line.

    Returns ``True`` when an existing assignment was replaced.
    """

    assignment = f"{name}={secret}"
    lines = path.read_text(encoding="utf-8").splitlines() if path.exists() else []
    replaced = False
    for index, line in enumerate(lines):
        if line.split("=", 1)[0].strip() == name:
            lines[index] = assignment
            replaced = True
    if not replaced:
        lines.append(assignment)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if os.name == "posix":
        os.chmod(path, 0o600)
    return replaced


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--bytes",
        type=int,
        default=DEFAULT_BYTE_LENGTH,
        help="Random bytes fed to token_urlsafe; at least 32.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        metavar="PATH",
        help=f"Write {ENV_VAR_NAME} into this env file instead of only printing it.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not echo the secret.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        secret = generate_secret(args.bytes)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    if args.env_file:
        action = "Rotated" if write_secret(args.env_file, secret) else "Added"
        print(f"{action} {ENV_VAR_NAME} in {args.env_file}", file=sys.stderr)

    if not args.quiet:
        print(secret)
    return 0


if __name__ == "__main__":
    sys.exit(main())
