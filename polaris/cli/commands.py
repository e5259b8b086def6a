# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the polaris CLI.

No print() calls. Everything goes through the structured logger, and
secrets or passwords from the config file are never logged.
"""

import argparse
import logging

from polaris.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    VALIDATION_ERROR,
)
from polaris.config import loader as config_loader
from polaris.config.exceptions import ConfigError, ConfigErrorKind
from polaris.logging.logger import get_logger
from polaris.runtime.directories import PlatformDirectories

_EXIT_CODES: dict[ConfigErrorKind, int] = {
    ConfigErrorKind.IO_ERROR: CONFIG_ERROR,
    ConfigErrorKind.TOML_PARSE_ERROR: CONFIG_ERROR,
    ConfigErrorKind.CONFIG_DIRECTORY_ERROR: RUNTIME_ERROR,
    ConfigErrorKind.CACHE_DIRECTORY_ERROR: RUNTIME_ERROR,
}


def exit_code_for(err: ConfigError) -> int:
    """Map a config failure to the exit code the process should return."""
    return _EXIT_CODES.get(err.kind, VALIDATION_ERROR)


def _command_logger(args: argparse.Namespace, command_name: str) -> logging.Logger:
    # The loader logs under its own name; keep it at the requested level too.
    get_logger(config_loader.__name__, log_level=args.log_level)
    return get_logger(f"polaris.cli.{command_name}", log_level=args.log_level)


def handle_check(args: argparse.Namespace) -> int:
    """Load the configuration and report what it contains."""
    logger = _command_logger(args, "check")

    result = config_loader.load(args.config)
    if result.error is not None:
        err = result.error
        logger.error(
            "Configuration error",
            extra={"command": "check", "kind": err.kind.value, "error": str(err)},
        )
        return exit_code_for(err)

    config = result.unwrap()
    pattern = config.index.album_art_pattern
    logger.info(
        "Configuration is valid",
        extra={
            "command": "check",
            "mount_points": {name: str(path) for name, path in config.vfs.mount_points.items()},
            "users": [user.name for user in config.users],
            "reindex_every_n_seconds": config.index.sleep_duration,
            "album_art_pattern": pattern.pattern if pattern is not None else None,
            "ddns_host": config.ddns.host if config.ddns is not None else None,
            "index_path": str(config.index.path),
        },
    )
    return SUCCESS


def handle_paths(args: argparse.Namespace) -> int:
    """Show where the config file and the index live, without reading anything."""
    logger = _command_logger(args, "paths")
    directories = PlatformDirectories()

    try:
        config_path = config_loader.resolve_config_path(args.config, directories)
        index_path = config_loader.resolve_index_path(directories)
    except ConfigError as err:
        logger.error(
            "Cannot resolve paths",
            extra={"command": "paths", "kind": err.kind.value, "error": str(err)},
        )
        return exit_code_for(err)

    logger.info(
        "Resolved paths",
        extra={
            "command": "paths",
            "config_path": str(config_path),
            "config_exists": config_path.is_file(),
            "index_path": str(index_path),
        },
    )
    return SUCCESS
