from __future__ import annotations

import json
import logging
import sys
import time
from enum import Enum
from pathlib import Path

import click
import colorama

from . import __version__
from .api import SteamTimeSync
from .constants import EXCLUDED_CONFIG_FILE_PARAMS
from .custom_formatter import CustomFormatter
from .enums import OutputMode, SecretFormat
from .secret import normalize_secret
from .totp import (
    generate_auth_code,
    generate_confirmation_key,
    get_device_id,
    get_time,
    seconds_remaining,
)
from .utils import SteamTotpException, color_text

logger = logging.getLogger("steamtotp")


def get_param_string(param: click.Parameter):
    if isinstance(param.default, Enum):
        return param.default.value
    elif isinstance(param.default, Path):
        return str(param.default)
    elif isinstance(param.default, (str, int, float, bool)) or param.default is None:
        return param.default
    return None


def write_default_config_file(ctx: click.Context) -> None:
    ctx.params["config_path"].parent.mkdir(parents=True, exist_ok=True)
    config_file = {
        param.name: get_param_string(param)
        for param in ctx.command.params
        if param.name not in EXCLUDED_CONFIG_FILE_PARAMS
    }
    ctx.params["config_path"].write_text(json.dumps(config_file, indent=4))


def load_config_file(
    ctx: click.Context,
    param: click.Parameter,
    no_config_file: bool,
) -> bool:
    if no_config_file:
        return no_config_file
    if not ctx.params["config_path"].exists():
        write_default_config_file(ctx)
    config_file = dict(json.loads(ctx.params["config_path"].read_text()))
    for param in ctx.command.params:
        if (
            config_file.get(param.name) is not None
            and param.name not in EXCLUDED_CONFIG_FILE_PARAMS
            and not ctx.get_parameter_source(param.name)
            == click.core.ParameterSource.COMMANDLINE
        ):
            ctx.params[param.name] = param.type_cast_value(ctx, config_file[param.name])
    return no_config_file


def watch_auth_code(secret: bytes, time_offset: int) -> None:
    last_code = None
    try:
        while True:
            code = generate_auth_code(secret, time_offset)
            if code != last_code:
                remaining = color_text(
                    f"({seconds_remaining(time_offset)}s left)",
                    colorama.Style.DIM,
                )
                click.echo(f"{code} {remaining}")
                last_code = code
            time.sleep(1)
    except KeyboardInterrupt:
        logger.debug("Stopped watching")


@click.command()
@click.help_option("-h", "--help")
@click.version_option(__version__, "-v", "--version")
@click.argument(
    "secret",
    type=str,
)
@click.option(
    "--mode",
    "-m",
    type=OutputMode,
    default=OutputMode.CODE.value,
    help="What to generate. In device-id mode SECRET is the SteamID.",
)
@click.option(
    "--secret-format",
    type=click.Choice(["auto", "hex", "base64"]),
    default=SecretFormat.AUTO.value,
    help="Encoding of SECRET (auto, hex or base64).",
)
@click.option(
    "--time-offset",
    "-t",
    type=int,
    default=0,
    help="Seconds to add to the local clock.",
)
@click.option(
    "--sync-time",
    "-s",
    is_flag=True,
    default=False,
    help="Query the Steam servers for the clock offset before generating.",
)
@click.option(
    "--tag",
    type=str,
    default="conf",
    help="Confirmation tag (conf, details, allow, cancel).",
)
@click.option(
    "--timestamp",
    type=int,
    default=None,
    help="Unix time to sign confirmation keys with. Defaults to now.",
)
@click.option(
    "--watch",
    "-w",
    is_flag=True,
    default=False,
    help="Keep printing a new code every time the window changes.",
)
@click.option(
    "--config-path",
    type=Path,
    default=Path.home() / ".steamtotp" / "config.json",
    help="Path to config file.",
)
@click.option(
    "--log-level",
    type=str,
    default="INFO",
    help="Log level.",
)
@click.option(
    "--no-exceptions",
    is_flag=True,
    default=False,
    help="Don't print exceptions.",
)
# This option should always be last
@click.option(
    "--no-config-file",
    "-n",
    is_flag=True,
    default=False,
    callback=load_config_file,
    help="Do not use a config file.",
)
def main(
    secret: str,
    mode: OutputMode,
    secret_format: str,
    time_offset: int,
    sync_time: bool,
    tag: str,
    timestamp: int | None,
    watch: bool,
    config_path: Path,
    log_level: str,
    no_exceptions: bool,
    no_config_file: bool,
) -> None:
    colorama.just_fix_windows_console()
    logger.setLevel(log_level)
    logger.handlers.clear()
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(CustomFormatter())
    logger.addHandler(stream_handler)

    if mode == OutputMode.DEVICE_ID:
        click.echo(get_device_id(secret))
        return

    try:
        secret_bytes = normalize_secret(secret, SecretFormat(secret_format))
    except SteamTotpException:
        logger.critical("Failed to read secret", exc_info=not no_exceptions)
        sys.exit(1)

    if sync_time:
        try:
            measured = SteamTimeSync().query_offset()
        except SteamTotpException:
            logger.critical(
                "Failed to query the Steam server time",
                exc_info=not no_exceptions,
            )
            sys.exit(1)
        logger.info(
            f"Clock offset is {measured.offset}s (latency {measured.latency}ms)"
        )
        time_offset = measured.offset

    try:
        if mode == OutputMode.CONFIRMATION_KEY:
            if timestamp is None:
                timestamp = get_time(time_offset)
            click.echo(generate_confirmation_key(secret_bytes, timestamp, tag))
        elif watch:
            watch_auth_code(secret_bytes, time_offset)
        else:
            click.echo(generate_auth_code(secret_bytes, time_offset))
    except (SteamTotpException, ValueError):
        logger.critical(
            f"Failed to generate {mode.value}",
            exc_info=not no_exceptions,
        )
        sys.exit(1)
