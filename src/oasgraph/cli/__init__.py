from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import NoReturn

import click

from oasgraph.config import ConfigError, OasGraphConfig
from oasgraph.core.errors import LoaderError, OasGraphError
from oasgraph.core.version import OASGRAPH_VERSION

if sys.version_info < (3, 11):
    from tomli import TOMLDecodeError
else:
    from tomllib import TOMLDecodeError

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Data:
    config: OasGraphConfig

    __slots__ = ("config",)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config-file",
    "config_file",
    help="The path to `oasgraph.toml` file to use for configuration",
    metavar="PATH",
    type=str,
)
@click.version_option(OASGRAPH_VERSION, prog_name="oasgraph")
@click.pass_context
def oasgraph(ctx: click.Context, config_file: str | None) -> None:
    """Translate OpenAPI descriptions into GraphQL schemas."""
    try:
        if config_file is not None:
            config = OasGraphConfig.from_path(config_file)
        else:
            config = OasGraphConfig.discover()
    except FileNotFoundError:
        _fail(f"Failed to load configuration file from {config_file}", "The configuration file does not exist")
    except (TOMLDecodeError, ConfigError) as exc:
        if isinstance(exc, TOMLDecodeError):
            detail = "The configuration file content is not valid TOML"
        else:
            detail = "The loaded configuration is incorrect"
        location = f" from {config_file}" if config_file else ""
        _fail(f"Failed to load configuration file{location}", f"{detail}\n\n{exc}")
    ctx.obj = Data(config=config)


@oasgraph.command(name="print-schema", context_settings=CONTEXT_SETTINGS)
@click.argument("location", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    "output",
    help="Write the schema to a file instead of stdout",
    type=click.File("w", encoding="utf-8"),
    default="-",
)
@click.pass_obj
def print_schema(data: Data, location: str, output: click.utils.LazyFile) -> None:
    """Print the GraphQL SDL generated for the API description at LOCATION."""
    import graphql

    from oasgraph.openapi import from_path
    from oasgraph.schema import build_schema

    try:
        document = from_path(location)
        schema = build_schema(document, config=data.config)
        sdl = graphql.print_schema(schema)
    except LoaderError as exc:
        extras = "\n".join(f"    {extra}" for extra in exc.extras)
        _fail(f"Failed to load API description from {location}", f"{exc}\n{extras}".rstrip())
    except OasGraphError as exc:
        _fail("Failed to translate the API description", str(exc))
    except TypeError as exc:
        # `graphql-core` wraps errors raised while resolving field thunks
        if isinstance(exc.__cause__, OasGraphError):
            _fail("Failed to translate the API description", str(exc.__cause__))
        raise
    click.echo(sdl, file=output)


def _fail(title: str, detail: str) -> NoReturn:
    click.secho(f"❌  {title}", fg="red", bold=True, err=True)
    click.echo(f"\n{detail}", err=True)
    sys.exit(1)
