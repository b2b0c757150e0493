"""Typer-based command line interface: ``reflow <width> [inputfile [outputfile]]``.

The command reads text from ``inputfile`` (standard input when omitted),
normalizes it with line glueing on and whitespace folding off by default, then
writes it word wrapped at ``width`` columns to ``outputfile`` (standard output
when omitted).

Exit codes
----------
0 success
1 usage error (wrong argument count, width not a positive integer)
3 I/O error (unreadable input, unwritable output)
4 configuration error
"""

from __future__ import annotations

import re
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import load_config
from .transport import TextTransport
from .utils.errors import ConfigurationError, UsageError
from .utils.logging import set_level

app = typer.Typer(
    name="reflow",
    help="Normalize text and word wrap it at a fixed width.",
    add_completion=False,
)

USAGE = "Usage: reflow width [inputfile [outputfile]]"

_WIDTH_RE = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def parse_width(value: str) -> int:
    """Parse a wrap width; the whole argument must be a positive integer."""

    if not _WIDTH_RE.fullmatch(value):
        raise UsageError(f"invalid width: {value!r}")
    width = int(value)
    if width < 1:
        raise UsageError("width must be at least 1")
    return width


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def reflow(  # noqa: PLR0913
    ctx: typer.Context,
    width: Optional[str] = typer.Argument(  # noqa: B008
        None, metavar="WIDTH", help="Maximum line width in characters"
    ),
    in_path: Optional[Path] = typer.Argument(  # noqa: B008
        None, metavar="[INPUTFILE]", help="Input file; standard input when omitted"
    ),
    out_path: Optional[Path] = typer.Argument(  # noqa: B008
        None, metavar="[OUTPUTFILE]", help="Output file; standard output when omitted"
    ),
    fold: Optional[bool] = typer.Option(  # noqa: B008
        None, "--fold/--no-fold", help="Collapse whitespace runs before wrapping"
    ),
    glue: Optional[bool] = typer.Option(  # noqa: B008
        None, "--glue/--no-glue", help="Join single line breaks into spaces"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Re-flow text so that no line exceeds WIDTH characters."""

    if width is None or ctx.args:
        _safe_exit(1, USAGE)
    try:
        wrap_width = parse_width(width)
    except UsageError:
        _safe_exit(1, "Width should be a positive number")

    if verbose:
        set_level("DEBUG")

    try:
        cfg = load_config(config_path)
    except (ValidationError, yaml.YAMLError, OSError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    if fold is None:
        fold = cfg.reflow.fold_whitespace
    if glue is None:
        glue = cfg.reflow.glue_lines

    try:
        transport = TextTransport(
            cfg.text,
            fold_whitespace=fold,
            glue_lines=glue,
            word_wrap=True,
            wrap_width=wrap_width,
        )
    except (ConfigurationError, ValidationError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    if verbose:
        typer.echo(f"Configured {transport!r}", err=True)

    try:
        with Timing() as t_parse:
            if in_path is not None:
                parsed = transport.parse(in_path)
            else:
                parsed = transport.parse(typer.get_binary_stream("stdin"))
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(
            f"Normalized to {len(parsed.text)} bytes (changed={parsed.changed}) "
            f"in {t_parse.ms:.1f} ms",
            err=True,
        )

    try:
        with Timing() as t_emit:
            if out_path is not None:
                with out_path.open("wb") as fh:
                    transport.emit(parsed, fh)
            else:
                stdout = typer.get_binary_stream("stdout")
                transport.emit(parsed, stdout)
                stdout.flush()
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(f"Wrapped at {wrap_width} in {t_emit.ms:.1f} ms", err=True)


def main() -> None:
    """Console script entry point."""

    app()
