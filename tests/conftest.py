# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for polaris tests.

Fixtures here are available to every test file automatically.
We keep them minimal, just the stuff that multiple test modules need.
"""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from polaris.runtime.directories import DirectoryResolutionError, StaticDirectories

WriteConfig = Callable[[str], Path]


class FailingDirectories:
    """A DirectoryProvider whose roots can be made to fail one at a time."""

    def __init__(
        self,
        root: Path,
        fail_config: bool = False,
        fail_cache: bool = False,
    ) -> None:
        self.root = root
        self.fail_config = fail_config
        self.fail_cache = fail_cache
        self.calls: list[str] = []

    def get_config_root(self) -> Path:
        self.calls.append("config")
        if self.fail_config:
            raise DirectoryResolutionError("no config root")
        return self.root / "config"

    def get_cache_root(self) -> Path:
        self.calls.append("cache")
        if self.fail_cache:
            raise DirectoryResolutionError("no cache root")
        return self.root / "cache"


@pytest.fixture()
def directories(tmp_path: Path) -> StaticDirectories:
    """Config and cache roots inside the test's temp directory."""
    config_root = tmp_path / "config"
    cache_root = tmp_path / "cache"
    config_root.mkdir()
    cache_root.mkdir()
    return StaticDirectories(config_root=config_root, cache_root=cache_root)


@pytest.fixture()
def write_config(tmp_path: Path) -> WriteConfig:
    """Write a dedented TOML document to a temp file and return its path."""

    def _write(content: str, name: str = "polaris.toml") -> Path:
        config_file = tmp_path / name
        config_file.write_text(textwrap.dedent(content), encoding="utf-8")
        return config_file

    return _write


@pytest.fixture()
def minimal_config_file(write_config: WriteConfig) -> Path:
    """The smallest document that loads: just the secret."""
    return write_config('auth_secret = "s3cr3t-value"\n')


@pytest.fixture()
def full_config_file(write_config: WriteConfig) -> Path:
    """A document that uses every key the loader understands."""
    return write_config(
        """\
        auth_secret = "s3cr3t-value"
        reindex_every_n_seconds = 600
        album_art_pattern = '^[Cc]over\\.(jpg|png)$'

        mount_dirs = [
          { name = "music", source = "/srv/media/music" },
          { name = "video", source = 'D:\\Media\\Video\\' },
        ]

        users = [
          { name = "alice", password = "hunter2" },
          { name = "bob", password = "correct horse" },
        ]

        [ydns]
        host = "home.ydns.eu"
        username = "alice@example.com"
        password = "ddns-pass"
        """
    )


@pytest.fixture()
def broken_toml_file(write_config: WriteConfig) -> Path:
    """A file that isn't valid TOML at all (unterminated array)."""
    return write_config(
        """\
        auth_secret = "s3cr3t-value"
        mount_dirs = [
          { name = "music", source = "/srv/music" },
        """
    )
