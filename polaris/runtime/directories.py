# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Where Polaris keeps its config file and its cache.

The loader never asks the OS directly. It receives a DirectoryProvider,
which makes it possible to point a test (or a portable install) at any
directory layout. PlatformDirectories defers to platformdirs for the
per-OS conventions (XDG on Linux, ~/Library on macOS, %LOCALAPPDATA% on
Windows).
"""

from pathlib import Path
from typing import Protocol

import platformdirs

APP_NAME = "polaris"
APP_AUTHOR = "permafrost"


class DirectoryResolutionError(RuntimeError):
    """Raised when a platform directory cannot be located or created."""


class DirectoryProvider(Protocol):
    def get_config_root(self) -> Path: ...

    def get_cache_root(self) -> Path: ...


class StaticDirectories:
    """Fixed roots. Nothing is created on disk."""

    def __init__(self, config_root: Path, cache_root: Path) -> None:
        self.config_root = Path(config_root)
        self.cache_root = Path(cache_root)

    def get_config_root(self) -> Path:
        return self.config_root

    def get_cache_root(self) -> Path:
        return self.cache_root


class PlatformDirectories:
    """
    Per-user config and cache roots for the current platform.

    Both getters create the directory if it is missing, so a fresh install
    has somewhere to put polaris.toml and index.sqlite.

    Args:
        app_name: Leaf directory name.
        app_author: Extra path level, used on Windows only.
    """

    def __init__(self, app_name: str = APP_NAME, app_author: str = APP_AUTHOR) -> None:
        self.app_name = app_name
        self.app_author = app_author

    def get_config_root(self) -> Path:
        try:
            return Path(
                platformdirs.user_config_dir(self.app_name, self.app_author, ensure_exists=True)
            )
        except OSError as err:
            raise DirectoryResolutionError(f"Cannot create config directory: {err}") from err

    def get_cache_root(self) -> Path:
        try:
            return Path(
                platformdirs.user_cache_dir(self.app_name, self.app_author, ensure_exists=True)
            )
        except OSError as err:
            raise DirectoryResolutionError(f"Cannot create cache directory: {err}") from err
