#!/usr/bin/env python3
"""
Generate and inspect identifiers from the command line.

Examples:
  PYTHONPATH=./src python scripts/cli.py generate --count 3
  PYTHONPATH=./src python scripts/cli.py generate --timestamp 1609459200000 --format hex
  PYTHONPATH=./src python scripts/cli.py inspect 01ETXKWW00000000000000000A --format json

Output format defaults to [cli].output in config.toml (or CLI_OUTPUT in the env).
"""
from __future__ import annotations

import click
from pydantic import BaseModel

from Lexid.config import Settings, load_settings
from Lexid.errors import FormatError, LexidError, RangeError
from Lexid.generator import get_generator
from Lexid.logging import setup_logging
from Lexid.ulid import Ulid


class UlidInfo(BaseModel):
    ulid: str
    timestamp: int
    # None when the timestamp lies past year 9999
    time: str | None
    randomness: str
    binary: str

    @classmethod
    def from_ulid(cls, value: Ulid) -> UlidInfo:
        try:
            iso = value.datetime.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        except OverflowError:
            iso = None
        return cls(
            ulid=str(value),
            timestamp=value.timestamp,
            time=iso,
            randomness=value.randomness.hex(),
            binary=value.to_bytes().hex(),
        )


def _render(value: Ulid, fmt: str) -> str:
    if fmt == "hex":
        return value.to_bytes().hex()
    if fmt == "json":
        return UlidInfo.from_ulid(value).model_dump_json()
    return str(value)


def build_app(settings: Settings | None = None) -> click.Group:
    settings = settings or load_settings()

    @click.group()
    def app() -> None:
        setup_logging(settings)

    @app.command()
    @click.option("--count", "-n", type=click.IntRange(min=1), default=1, show_default=True)
    @click.option("--timestamp", type=int, default=None, help="Milliseconds since epoch; defaults to now.")
    @click.option("--format", "fmt", type=click.Choice(["text", "hex", "json"]), default=None)
    def generate(count: int, timestamp: int | None, fmt: str | None) -> None:
        """Emit COUNT new identifiers, strictly increasing."""
        fmt = fmt or settings.cli_output
        gen = get_generator()
        for _ in range(count):
            try:
                value = gen.generate(timestamp)
            except RangeError as exc:
                raise click.BadParameter(str(exc), param_hint="'--timestamp'") from exc
            except LexidError as exc:
                raise click.ClickException(str(exc)) from exc
            click.echo(_render(value, fmt))

    @app.command(name="inspect")
    @click.argument("text")
    @click.option("--format", "fmt", type=click.Choice(["text", "json"]), default=None)
    def inspect_cmd(text: str, fmt: str | None) -> None:
        """Decode TEXT and show its parts."""
        fmt = fmt or settings.cli_output
        try:
            value = Ulid.parse(text)
        except FormatError as exc:
            raise click.BadParameter(str(exc), param_hint="'TEXT'") from exc
        info = UlidInfo.from_ulid(value)
        if fmt == "json":
            click.echo(info.model_dump_json())
            return
        for key, val in info.model_dump().items():
            click.echo(f"{key}: {'-' if val is None else val}")

    return app


def main() -> None:  # pragma: no cover
    app = build_app()
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
