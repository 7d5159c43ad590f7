"""Command-line interface for textquote.

Responsibilities:
- Expose user-facing commands for counting, pricing, and normalizing text.
- Resolve settings from the settings file, environment, and CLI overrides.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from .calculator import calculate
from .cli_rendering import (
    echo_calculation,
    echo_calculation_json,
    echo_tariff_list,
    exit_with_command_error,
)
from .config import ConfigLoader, validate_settings
from .errors import CommandStageError
from .io.sources import InputReadError, TextSource
from .models.datatypes import Settings, Tariff
from .telemetry.logger import RunLogger
from .text.normalizer import normalize

app = typer.Typer(
    name="textquote",
    no_args_is_help=True,
    help="Count new and reused characters and price text work.",
)

TextFileArgument = Annotated[
    Path,
    typer.Argument(help="Path to the full text file, or `-` to read standard input."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML settings file (overrides TEXTQUOTE_CONFIG)."),
]
CountSpacesOption = Annotated[
    bool | None,
    typer.Option("--count-spaces/--no-count-spaces", help="Count whitespace as characters."),
]
CollapseSpacesOption = Annotated[
    bool | None,
    typer.Option(
        "--collapse-spaces/--no-collapse-spaces", help="Collapse whitespace runs into one space."
    ),
]
CollapseNewlinesOption = Annotated[
    bool | None,
    typer.Option(
        "--collapse-newlines/--no-collapse-newlines",
        help="Collapse line-break runs into one newline.",
    ),
]
TabsToSpacesOption = Annotated[
    bool | None,
    typer.Option("--tabs-to-spaces/--no-tabs-to-spaces", help="Convert tabs to spaces."),
]
TrimRepeatedCharsOption = Annotated[
    bool | None,
    typer.Option(
        "--trim-repeated-chars/--no-trim-repeated-chars",
        help="Shorten repeated characters (----, ====, etc.) to three.",
    ),
]
RemoveZeroWidthOption = Annotated[
    bool | None,
    typer.Option(
        "--remove-zero-width/--no-remove-zero-width", help="Remove invisible characters."
    ),
]
TrimOption = Annotated[
    bool | None,
    typer.Option("--trim/--no-trim", help="Trim whitespace at start and end."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Emit phase logs to stderr."),
]


def _load_settings(config_file: Path | None) -> Settings:
    """Load settings from file and environment and map failures to stage errors."""

    try:
        base = ConfigLoader.from_yaml(config_file) if config_file is not None else None
        return ConfigLoader.from_env(base=base)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Config file not found: `{exc.filename or config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>` or TEXTQUOTE_CONFIG.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid settings: {exc}",
            hint="Fix settings schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Failed to load settings: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _apply_cli_overrides(
    settings: Settings,
    count_spaces: bool | None,
    labels: str | None,
    rule_overrides: dict[str, bool | None],
) -> Settings:
    """Return settings with explicit CLI values taking precedence."""

    normalization_changes = {
        key: value for key, value in rule_overrides.items() if value is not None
    }
    resolved = replace(
        settings,
        normalization=replace(settings.normalization, **normalization_changes),
        count_spaces=settings.count_spaces if count_spaces is None else count_spaces,
        labels=settings.labels if labels is None else labels.strip(),
    )
    try:
        validate_settings(resolved)
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid option value: {exc}",
            hint="Use `--labels reuse` or `--labels translation`.",
        ) from exc
    return resolved


def _resolve_tariff(settings: Settings, tariff_id: str | None) -> Tariff | None:
    """Resolve the selected tariff, falling back to the configured default."""

    selected_id = tariff_id.strip() if tariff_id is not None else settings.default_tariff_id
    if selected_id is None:
        return None
    tariff = settings.find_tariff(selected_id)
    if tariff is None:
        known = ", ".join(item.id for item in settings.tariffs) or "none"
        raise CommandStageError(
            stage="config",
            detail=f"Unknown tariff `{selected_id}`.",
            hint=f"Configured tariffs: {known}. Run `textquote tariffs` to list them.",
        )
    return tariff


def _read_inputs(text_file: Path, reused_files: list[Path]) -> tuple[str, list[str]]:
    """Read the full text and reused blocks and map failures to stage errors."""

    source = TextSource()
    try:
        texts = source.read_many([text_file, *reused_files])
    except InputReadError as exc:
        raise CommandStageError(
            stage="input",
            detail=str(exc),
            hint="Pass readable UTF-8 plain text files; extract document text beforehand.",
        ) from exc
    return texts[0], texts[1:]


def _rule_overrides(
    collapse_spaces: bool | None,
    collapse_newlines: bool | None,
    tabs_to_spaces: bool | None,
    trim_repeated_chars: bool | None,
    remove_zero_width: bool | None,
    trim: bool | None,
) -> dict[str, bool | None]:
    """Collect per-rule CLI toggles keyed by `NormalizationOptions` field name."""

    return {
        "collapse_spaces": collapse_spaces,
        "collapse_newlines": collapse_newlines,
        "tabs_to_spaces": tabs_to_spaces,
        "trim_repeated_chars": trim_repeated_chars,
        "remove_zero_width": remove_zero_width,
        "trim": trim,
    }


@app.command("calculate")
def calculate_command(
    text_file: TextFileArgument,
    reused: Annotated[
        list[Path] | None,
        typer.Option(
            "--reused",
            "-r",
            help="Reused/original text file; repeat for several blocks.",
        ),
    ] = None,
    tariff_id: Annotated[
        str | None,
        typer.Option("--tariff", "-t", help="Tariff id (overrides TEXTQUOTE_TARIFF)."),
    ] = None,
    config_file: ConfigOption = None,
    count_spaces: CountSpacesOption = None,
    labels: Annotated[
        str | None,
        typer.Option("--labels", help="Label preset: `reuse` or `translation`."),
    ] = None,
    collapse_spaces: CollapseSpacesOption = None,
    collapse_newlines: CollapseNewlinesOption = None,
    tabs_to_spaces: TabsToSpacesOption = None,
    trim_repeated_chars: TrimRepeatedCharsOption = None,
    remove_zero_width: RemoveZeroWidthOption = None,
    trim: TrimOption = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Print the result as JSON.")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Count new and reused characters and price them against a tariff."""

    run_logger = RunLogger(enabled=verbose)
    stage = "config"
    try:
        run_logger.log_stage_start(stage)
        settings = _apply_cli_overrides(
            _load_settings(config_file),
            count_spaces=count_spaces,
            labels=labels,
            rule_overrides=_rule_overrides(
                collapse_spaces,
                collapse_newlines,
                tabs_to_spaces,
                trim_repeated_chars,
                remove_zero_width,
                trim,
            ),
        )
        tariff = _resolve_tariff(settings, tariff_id)
        run_logger.log_stage_complete(stage, tariff=tariff.id if tariff else "none")

        stage = "input"
        run_logger.log_stage_start(stage)
        text, reused_texts = _read_inputs(text_file, reused or [])
        run_logger.log_stage_complete(stage, reused_blocks=len(reused_texts))

        stage = "calculate"
        run_logger.log_stage_start(stage)
        result = calculate(
            text,
            reused_texts,
            settings.normalization,
            settings.count_spaces,
            tariff,
        )
        run_logger.log_stage_complete(
            stage, total_chars=result.total_chars, reused_chars=result.reused_chars
        )
    except Exception as exc:
        run_logger.log_stage_failure(stage, type(exc).__name__)
        exit_with_command_error("calculate", exc)

    if json_output:
        echo_calculation_json(result, tariff)
    else:
        echo_calculation(result, settings.pricing_labels(), tariff)


@app.command("normalize")
def normalize_command(
    text_file: TextFileArgument,
    config_file: ConfigOption = None,
    count_spaces: CountSpacesOption = None,
    collapse_spaces: CollapseSpacesOption = None,
    collapse_newlines: CollapseNewlinesOption = None,
    tabs_to_spaces: TabsToSpacesOption = None,
    trim_repeated_chars: TrimRepeatedCharsOption = None,
    remove_zero_width: RemoveZeroWidthOption = None,
    trim: TrimOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the text exactly as it is measured."""

    run_logger = RunLogger(enabled=verbose)
    stage = "config"
    try:
        run_logger.log_stage_start(stage)
        settings = _apply_cli_overrides(
            _load_settings(config_file),
            count_spaces=count_spaces,
            labels=None,
            rule_overrides=_rule_overrides(
                collapse_spaces,
                collapse_newlines,
                tabs_to_spaces,
                trim_repeated_chars,
                remove_zero_width,
                trim,
            ),
        )
        run_logger.log_stage_complete(stage)

        stage = "input"
        run_logger.log_stage_start(stage)
        text, _ = _read_inputs(text_file, [])
        run_logger.log_stage_complete(stage)

        stage = "normalize"
        run_logger.log_stage_start(stage)
        normalized = normalize(text, settings.normalization, settings.count_spaces)
        run_logger.log_stage_complete(stage, chars=len(normalized))
    except Exception as exc:
        run_logger.log_stage_failure(stage, type(exc).__name__)
        exit_with_command_error("normalize", exc)

    typer.echo(normalized, nl=False)


@app.command("tariffs")
def tariffs_command(config_file: ConfigOption = None) -> None:
    """List configured tariffs."""

    try:
        settings = _load_settings(config_file)
    except Exception as exc:
        exit_with_command_error("tariffs", exc)

    echo_tariff_list(settings.tariffs, settings.default_tariff_id)


@app.command("options")
def options_command(config_file: ConfigOption = None) -> None:
    """Show the effective normalization options and space counting."""

    try:
        settings = _load_settings(config_file)
    except Exception as exc:
        exit_with_command_error("options", exc)

    for key, enabled in settings.normalization.as_dict().items():
        typer.echo(f"{key}: {'on' if enabled else 'off'}")
    typer.echo(f"count_spaces: {'on' if settings.count_spaces else 'off'}")
    typer.echo(f"labels: {settings.labels}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
