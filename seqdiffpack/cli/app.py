import json
from importlib.metadata import PackageNotFoundError, version as package_version
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from seqdiffpack.compare import (
    CONFIG_ENV_VAR,
    ArrayComparisonResult,
    ComparisonConfig,
    ComparisonConfigError,
    ComparisonModel,
    SequenceFormatError,
    assert_diffs,
    build_comparison_model,
    compare_arrays,
    load_comparison_config,
    parse_key_expression,
    render_diff_summary,
    render_diffs,
)
from seqdiffpack.compare.config import parse_key_assignment
from seqdiffpack.io import read_sequence

_log = logging.getLogger(__name__)

_log_info = _log.info

app = typer.Typer(help="SeqDiffKit CLI")

_LOG_FORMAT = "%(levelname)s - %(message)s"


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


@dataclass(frozen=True, slots=True)
class _ComparisonInputs:
    config: ComparisonConfig
    model: ComparisonModel
    left: list[Any]
    right: list[Any]


def _resolve_cli_version() -> str:
    try:
        return package_version("seqdiffkit")
    except PackageNotFoundError:
        from seqdiffpack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


def setup_logging(verbosity: int) -> None:
    """Attach a stderr handler to the ``seqdiffpack`` logger."""
    level = logging.WARNING
    if verbosity > 1:
        level = logging.DEBUG
    elif verbosity > 0:
        level = logging.INFO

    package_log = logging.getLogger("seqdiffpack")
    package_log.setLevel(level)
    if package_log.handlers:
        package_log.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_log.addHandler(handler)


@app.callback()
def app_options(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show SeqDiffKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log verbosity (-v for info, -vv for debug).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    ctx.obj = _OutputOptions(quiet=quiet, no_color=no_color, stable_json=stable_json)
    setup_logging(verbose)


def _options(ctx: typer.Context) -> _OutputOptions:
    options = ctx.find_object(_OutputOptions)
    return options if options is not None else _OutputOptions()


def _echo(ctx: typer.Context, message: str, *, err: bool = False, force: bool = False) -> None:
    options = _options(ctx)
    if options.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not options.no_color)


def _echo_json(ctx: typer.Context, payload: dict[str, Any], *, err: bool = False) -> None:
    options = _options(ctx)
    if options.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=not options.no_color)


def _fail(
    ctx: typer.Context,
    message: str,
    *,
    code: int,
    json_output: bool,
    left: Path,
    right: Path,
) -> None:
    if json_output:
        _echo_json(
            ctx,
            {
                "status": "error",
                "exit_code": code,
                "message": message,
                "left_path": str(left),
                "right_path": str(right),
            },
        )
    else:
        _echo(ctx, message, err=True)


def _resolve_config(
    config_path: Path | None,
    *,
    input_format: str | None,
    key: str | None,
    key_at: list[str] | None,
    prefix: int | None,
    base_path: str | None,
    category: str | None,
) -> ComparisonConfig:
    base = load_comparison_config(config_path) if config_path is not None else ComparisonConfig()

    assignments: list[tuple[str, str]] = []
    if key is not None:
        parse_key_expression(key)
        assignments.append(("", key.strip()))
    for raw in key_at or []:
        assignments.append(parse_key_assignment(raw))

    return base.with_overrides(
        category=category,
        base_path=base_path,
        key_expressions=assignments,
        correspond_prefix_length=prefix,
        input_format=input_format,
    )


def _load_inputs(
    ctx: typer.Context,
    command: str,
    left: Path,
    right: Path,
    *,
    json_output: bool,
    config_path: Path | None,
    input_format: str | None,
    key: str | None,
    key_at: list[str] | None,
    prefix: int | None,
    base_path: str | None,
    category: str | None,
) -> _ComparisonInputs:
    try:
        config = _resolve_config(
            config_path,
            input_format=input_format,
            key=key,
            key_at=key_at,
            prefix=prefix,
            base_path=base_path,
            category=category,
        )
        model = build_comparison_model(config)
    except ComparisonConfigError as error:
        _fail(
            ctx,
            f"{command} failed: {error}",
            code=2,
            json_output=json_output,
            left=left,
            right=right,
        )
        raise typer.Exit(code=2) from error
    except FileNotFoundError as error:
        _fail(
            ctx,
            f"{command} failed: config not found: {error.filename}",
            code=1,
            json_output=json_output,
            left=left,
            right=right,
        )
        raise typer.Exit(code=1) from error

    try:
        left_sequence = read_sequence(left, input_format=config.input_format)
        right_sequence = read_sequence(right, input_format=config.input_format)
    except (SequenceFormatError, FileNotFoundError) as error:
        _fail(
            ctx,
            f"{command} failed: {error}",
            code=1,
            json_output=json_output,
            left=left,
            right=right,
        )
        raise typer.Exit(code=1) from error

    return _ComparisonInputs(
        config=config,
        model=model,
        left=left_sequence,
        right=right_sequence,
    )


def _run_comparison(inputs: _ComparisonInputs) -> ArrayComparisonResult:
    config = inputs.config
    return compare_arrays(
        inputs.left,
        inputs.right,
        inputs.model,
        config.base_path,
        category=config.category,
    )


@app.command()
def compare(
    ctx: typer.Context,
    left: Path = typer.Argument(..., help="Path to the expected (left) sequence."),
    right: Path = typer.Argument(..., help="Path to the actual (right) sequence."),
    input_format: str | None = typer.Option(
        None,
        "--format",
        help="Input format: json (top-level array) or lines.",
    ),
    key: str | None = typer.Option(
        None,
        "--key",
        help="Key expression pairing changed elements, e.g. 'id' or 'meta.name, version'.",
    ),
    key_at: list[str] | None = typer.Option(
        None,
        "--key-at",
        help="LOCATOR=EXPRESSION key expression for a locator prefix. Repeatable.",
    ),
    prefix: int | None = typer.Option(
        None,
        "--prefix",
        min=1,
        help="Pair changed strings that share their first N characters.",
    ),
    base_path: str | None = typer.Option(
        None,
        "--base-path",
        help="Prefix for every reported locator.",
    ),
    category: str | None = typer.Option(
        None,
        "--category",
        help="Label for compared elements in diff messages.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        envvar=CONFIG_ENV_VAR,
        help="Path to JSON comparison config.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable comparison output.",
    ),
    max_diffs: int = typer.Option(
        8,
        "--max-diffs",
        help="Maximum number of differences to print in text mode.",
    ),
) -> None:
    """Compare two sequences and list their differences."""
    inputs = _load_inputs(
        ctx,
        "compare",
        left,
        right,
        json_output=json_output,
        config_path=config_path,
        input_format=input_format,
        key=key,
        key_at=key_at,
        prefix=prefix,
        base_path=base_path,
        category=category,
    )
    result = _run_comparison(inputs)
    _log_info("Compared %s with %s: %s", left, right, result.summary())

    if json_output:
        _echo_json(
            ctx,
            {
                **result.to_dict(),
                "status": "ok",
                "exit_code": 0,
                "message": "compare completed",
                "left_path": str(left),
                "right_path": str(right),
            },
        )
        return

    _echo(ctx, render_diff_summary(result))
    _echo(ctx, render_diffs(result, max_diffs=max_diffs))


@app.command(name="assert")
def assert_identical(
    ctx: typer.Context,
    left: Path = typer.Argument(..., help="Path to the expected (left) sequence."),
    right: Path = typer.Argument(..., help="Path to the actual (right) sequence."),
    input_format: str | None = typer.Option(
        None,
        "--format",
        help="Input format: json (top-level array) or lines.",
    ),
    key: str | None = typer.Option(
        None,
        "--key",
        help="Key expression pairing changed elements, e.g. 'id' or 'meta.name, version'.",
    ),
    key_at: list[str] | None = typer.Option(
        None,
        "--key-at",
        help="LOCATOR=EXPRESSION key expression for a locator prefix. Repeatable.",
    ),
    prefix: int | None = typer.Option(
        None,
        "--prefix",
        min=1,
        help="Pair changed strings that share their first N characters.",
    ),
    base_path: str | None = typer.Option(
        None,
        "--base-path",
        help="Prefix for every reported locator.",
    ),
    category: str | None = typer.Option(
        None,
        "--category",
        help="Label for compared elements in diff messages.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        envvar=CONFIG_ENV_VAR,
        help="Path to JSON comparison config.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable assertion output.",
    ),
    max_diffs: int = typer.Option(
        8,
        "--max-diffs",
        help="Maximum number of differences to print in text mode.",
    ),
) -> None:
    """Assert that two sequences have no differences."""
    inputs = _load_inputs(
        ctx,
        "assert",
        left,
        right,
        json_output=json_output,
        config_path=config_path,
        input_format=input_format,
        key=key,
        key_at=key_at,
        prefix=prefix,
        base_path=base_path,
        category=category,
    )
    assertion = assert_diffs(_run_comparison(inputs))

    if json_output:
        payload = assertion.to_dict()
        payload["left_path"] = str(left)
        payload["right_path"] = str(right)
        _echo_json(ctx, payload)
    else:
        if assertion.passed:
            _echo(ctx, f"assert passed: left={left} right={right}")
        else:
            _echo(
                ctx,
                f"assert failed: differences detected (left={left} right={right})",
                force=True,
            )
        _echo(ctx, render_diff_summary(assertion.result))
        _echo(ctx, render_diffs(assertion.result, max_diffs=max_diffs))

    if not assertion.passed:
        raise typer.Exit(code=assertion.exit_code)


def main() -> None:
    app()
