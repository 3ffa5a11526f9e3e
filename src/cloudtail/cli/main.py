"""Click CLI group: serve and check-config commands."""

from __future__ import annotations

import click
import uvicorn

from cloudtail.config import build_controller, get_settings, load_controller, load_file_config
from cloudtail.dispatch.controller import Controller
from cloudtail.errors import ConfigurationError
from cloudtail.logging import configure_logging


@click.group()
def cli() -> None:
    """cloudtail event router CLI."""


@cli.command()
@click.option("-p", "--port", type=int, default=None, help="Listen port (default: config or BIND_PORT).")
@click.option("--host", type=str, default=None, help="Bind host (default: BIND_HOST).")
@click.option(
    "-f",
    "--config",
    "config_path",
    type=click.Path(path_type=str),
    default=None,
    help="JSON config file with notifiers and seed stashes.",
)
def serve(port: int | None, host: str | None, config_path: str | None) -> None:
    """Start the HTTP listener."""
    from cloudtail.main import create_app

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    resolved_path = config_path or settings.config_path
    debug = False
    file_port: int | None = None
    try:
        if resolved_path:
            file_config = load_file_config(resolved_path)
            debug = file_config.debug
            file_port = file_config.listen_port()
            controller = build_controller(file_config)
        else:
            controller = Controller()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    if debug:
        configure_logging("DEBUG", settings.log_json)
    bind_host = host or settings.bind_host
    bind_port = port or file_port or settings.bind_port
    click.echo(f"Listening on {bind_host}:{bind_port}", err=True)
    uvicorn.run(create_app(controller), host=bind_host, port=bind_port, log_config=None)


@cli.command("check-config")
@click.argument("path", type=click.Path(path_type=str))
def check_config(path: str) -> None:
    """Validate a config file and print what it would load."""
    try:
        controller = load_controller(path)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    names = controller.notifier_names()
    click.echo(f"notifiers: {', '.join(names) if names else '(none)'}")
    click.echo(f"stashes: {len(controller.list_stashes())}")
