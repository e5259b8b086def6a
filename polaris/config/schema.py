# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Typed configuration models for Polaris.

Everything the rest of the server reads at startup lives in Config. All
models are frozen pydantic models: once the loader hands a Config over it
cannot be mutated. Records that come straight out of the TOML document
(users, mount dirs, the ydns table) are validated in strict mode, so a
number where a string is expected is rejected instead of coerced.
"""

import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

INDEX_FILE_NAME = "index.sqlite"

# 30 minutes between automatic rescans of the media library.
DEFAULT_SLEEP_DURATION = 60 * 30


class User(BaseModel):
    """A login. Password hashing is handled by the user store, not here."""

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    name: str
    password: str


class DDNSConfig(BaseModel):
    """Credentials for the dynamic DNS updater."""

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    host: str
    username: str
    password: str


class MountDir(BaseModel):
    """One raw `mount_dirs` record, before its source path is normalized."""

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    name: str
    source: str


class VfsConfig(BaseModel):
    """Mount name to real directory mapping for the virtual file system."""

    model_config = ConfigDict(frozen=True)

    mount_points: dict[str, Path] = Field(default_factory=dict)

    def get_source(self, name: str) -> Optional[Path]:
        return self.mount_points.get(name)


class IndexConfig(BaseModel):
    """
    Indexer settings.

    `path` is never read from the document. The loader always sets it to
    `<cache root>/index.sqlite` after every document field has been parsed.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(default=Path(INDEX_FILE_NAME))
    sleep_duration: int = Field(
        default=DEFAULT_SLEEP_DURATION,
        ge=0,
        description="Seconds between automatic reindexing passes",
    )
    album_art_pattern: Optional[re.Pattern[str]] = Field(
        default=None,
        description="Matches file names the indexer treats as cover art",
    )


class Config(BaseModel):
    """Root configuration object handed to the rest of the server."""

    model_config = ConfigDict(frozen=True)

    secret: str
    vfs: VfsConfig = Field(default_factory=VfsConfig)
    users: tuple[User, ...] = ()
    index: IndexConfig = Field(default_factory=IndexConfig)
    ddns: Optional[DDNSConfig] = None
