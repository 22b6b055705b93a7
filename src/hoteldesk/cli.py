"""CLI main entry point."""

import json
import logging
import os
from pathlib import Path

import click

from .components.defaults import merge_config
from .components.descriptors import ComponentConfig
from .components.schema import build_defaults, build_schema
from .config import Config
from .db import close_db, create_tables, init_db
from .enums import ComponentType
from .errors import HotelDeskException
from .log import setup as setup_log
from .store import ModuleStore

logger = logging.getLogger(__name__)


def _load_config(config_path: str) -> Config:
    if Path(config_path).exists():
        logger.info(f"Loading configuration file: {config_path}")
        return Config.load_from_file(config_path)
    logger.info(f"Configuration file {config_path} not found, using defaults")
    return Config()


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """HotelDesk - metadata-driven dashboard components."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    try:
        ctx.obj["config"] = _load_config(config)
    except HotelDeskException as e:
        raise click.ClickException(str(e))
    setup_log(ctx.obj["config"].log_file)


@cli.command(name="init-db")
@click.pass_context
def init_database(ctx):
    """Create the database tables."""
    cfg = ctx.obj["config"]
    init_db(cfg.database_path)
    try:
        create_tables()
        click.echo(f"Database ready: {cfg.database_path}")
    finally:
        close_db()


@cli.command(name="show-config")
@click.argument("event_id", type=int)
@click.pass_context
def show_config(ctx, event_id: int):
    """Print the merged config of an event as JSON."""
    cfg = ctx.obj["config"]
    init_db(cfg.database_path)
    try:
        create_tables()
        record = ModuleStore().get_event(event_id)
        merged = merge_config(record.parsed_type, record.config)
        click.echo(json.dumps(merged.to_json(), indent=2, ensure_ascii=False))
    except HotelDeskException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="check-config")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--type",
    "component_type",
    type=click.Choice([t.value for t in ComponentType], case_sensitive=False),
    required=True,
    help="Component type the config is written for",
)
def check_config(file: str, component_type: str):
    """Merge a stored config file with defaults and report form defaults that fail validation."""
    try:
        stored = json.loads(Path(file).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {file}: {e}")

    merged: ComponentConfig = merge_config(component_type, stored)
    click.echo(json.dumps(merged.to_json(), indent=2, ensure_ascii=False))

    if merged.fields:
        errors = build_schema(merged.fields).check(build_defaults(merged.fields))
        for key, message in errors.items():
            click.echo(f"warning: default for '{key}' is invalid: {message}", err=True)


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.option("--reload/--no-reload", default=None, help="Enable/disable auto reload")
@click.pass_context
def serve(ctx, host, port, reload):
    """Start the API server."""
    import uvicorn

    cfg = ctx.obj["config"]
    host = host or cfg.web.host
    port = port or cfg.web.port
    if reload is None:
        reload = cfg.web.debug

    if reload:
        logger.warning("Auto reload is enabled. This should NOT be used in production.")

    if Path(ctx.obj["config_path"]).exists():
        os.environ["CONFIG_FILE"] = ctx.obj["config_path"]
    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run(
        "hoteldesk.api:create_app",
        host=host,
        port=port,
        factory=True,
        reload=reload,
    )


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
