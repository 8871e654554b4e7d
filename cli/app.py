from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError

from cli.config import load_config
from cli.render import render_alert_body, render_report
from logging_config import configure_logging, resolve_level
from models.schemas import SMTPConfig
from notify.config import ConfigError, load_smtp_config, save_smtp_config
from notify.email import EmailNotifier, NotificationError
from services.monitor import MonitorAborted, build_default_monitor

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Check local host metrics against fixed thresholds and email an alert on breach.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _fail(message: str) -> NoReturn:
    logger.error(message)
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    level = None
    if log_level is not None:
        try:
            level = resolve_level(log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="'--log-level'") from exc
    configure_logging(level)


@app.command("check")
def check_command(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        dir_okay=False,
        help="SMTP configuration file (defaults to HOSTWATCH_CONFIG_PATH env or ./config.json).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the alert email instead of sending it. No configuration file is needed.",
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        help="Skip metrics that cannot be collected instead of aborting the run.",
    ),
) -> None:
    """Collect metrics once, evaluate thresholds and email any alerts."""
    cli_config = load_config(config_path=config)

    notifier = None
    if not dry_run:
        try:
            smtp_config = load_smtp_config(cli_config.config_path)
        except ConfigError as exc:
            _fail(f"Error reading SMTP config: {exc}")
        notifier = EmailNotifier(smtp_config, timeout=cli_config.smtp_timeout)

    monitor = build_default_monitor(notifier=notifier, keep_going=keep_going)
    try:
        run = monitor.check()
    except MonitorAborted as exc:
        _fail(str(exc))

    render_report(run.report)
    if dry_run:
        render_alert_body(run.report)
        return

    try:
        sent = monitor.dispatch(run)
    except NotificationError as exc:
        _fail(str(exc))
    if sent:
        typer.secho("Alert email sent successfully!", fg=typer.colors.GREEN)


@app.command("init-config")
def init_config_command(
    path: Path = typer.Argument(Path("config.json"), dir_okay=False, help="Where to write the file."),
    smtp_host: str = typer.Option(..., "--smtp-host", help="SMTP server host name."),
    smtp_port: str = typer.Option("587", "--smtp-port", help="SMTP server port."),
    from_email: str = typer.Option(..., "--from-email", help="Sender address, also the login user."),
    to_email: str = typer.Option(..., "--to-email", help="Alert recipient."),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        help="SMTP password for the sender account.",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
) -> None:
    """Write an SMTP configuration file in the shape `check` reads."""
    if path.exists() and not force:
        _fail(f"{path} already exists; pass --force to overwrite it.")

    try:
        smtp_config = SMTPConfig(
            smtp_host=smtp_host,
            smtp_port=smtp_port,
            from_email=from_email,
            email_password=password,
            to_email=to_email,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    save_smtp_config(smtp_config, path)
    typer.secho(f"Configuration written to {path}", fg=typer.colors.GREEN)
