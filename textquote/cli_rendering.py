"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
character counts, prices, and configured tariff listings.
"""

from __future__ import annotations

import json
from typing import NoReturn

import typer

from .calculator import rounded_price_summary
from .errors import CommandStageError
from .models.datatypes import CalculationResult, PricingLabels, Tariff

REUSED_EXCEEDS_TOTAL_WARNING = "Warning: reused text exceeds total. Check your input."
NO_TARIFF_NOTE = "Select a tariff (--tariff) to calculate prices."


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(exc.headline(command_name), fg=typer.colors.RED, err=True)
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def format_count(value: int) -> str:
    """Format a character count with thousands separators."""

    return f"{value:,}"


def format_money(value: float) -> str:
    """Format a monetary amount with two decimals and thousands separators."""

    return f"{value:,.2f}"


def echo_calculation(
    result: CalculationResult, labels: PricingLabels, tariff: Tariff | None
) -> None:
    """Print counts, optional costs, and input warnings for one calculation."""

    if tariff is not None:
        typer.echo(f"Tariff: {tariff.label} ({tariff.id})")
    typer.echo(f"{labels.new_text}: {format_count(result.new_text_chars)}")
    typer.echo(f"{labels.reused}: {format_count(result.reused_chars)}")
    typer.echo(f"Total characters: {format_count(result.total_chars)}")

    if result.price is not None:
        typer.echo(f"{labels.new_text_cost}: {format_money(result.price.new_text)}")
        typer.echo(f"{labels.reused_cost}: {format_money(result.price.reused)}")
        typer.echo(f"Total cost: {format_money(result.price.total)}")

    if result.reused_exceeds_total:
        typer.secho(REUSED_EXCEEDS_TOTAL_WARNING, fg=typer.colors.YELLOW, err=True)
    if tariff is None:
        typer.echo(NO_TARIFF_NOTE)


def echo_calculation_json(result: CalculationResult, tariff: Tariff | None) -> None:
    """Print one calculation as a stable JSON document."""

    payload = result.as_dict()
    if result.price is not None:
        payload["price"] = rounded_price_summary(result.price)
    payload["tariff"] = tariff.id if tariff is not None else None
    payload["reused_exceeds_total"] = result.reused_exceeds_total
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))


def echo_tariff_list(tariffs: tuple[Tariff, ...], default_tariff_id: str | None) -> None:
    """Print configured tariffs in declaration order."""

    if not tariffs:
        typer.echo("No tariffs configured.")
        return
    for tariff in tariffs:
        marker = " (default)" if tariff.id == default_tariff_id else ""
        typer.echo(
            f"{tariff.id}{marker}: {tariff.label} | "
            f"{format_count(tariff.chars_per_sheet)} chars/sheet | "
            f"new {format_money(tariff.new_text_price)} | "
            f"reused {format_money(tariff.reused_text_price)}"
        )
