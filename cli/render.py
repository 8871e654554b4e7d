from __future__ import annotations

from typing import Iterable

import typer

from services.evaluator import AlertReport


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_lines(lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(line)


def render_report(report: AlertReport) -> None:
    """Print one line per metric that is within its safe range."""
    echo_lines(report.safe_lines)
    for warning in report.warnings:
        typer.secho(warning, fg=typer.colors.YELLOW, err=True)


def render_alert_body(report: AlertReport) -> None:
    typer.echo()
    echo_heading("Alert email (not sent)")
    if report.body:
        typer.echo(report.body, nl=False)
    else:
        typer.echo("No alerts.")
