# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Field table for polaris.toml.

Each top-level key the loader understands is described once by a FieldSpec:
the key name, whether it must be present, the shape its value must have
(a pydantic TypeAdapter), the error raised when the shape is wrong, and an
apply step that stores the validated value in a ConfigDraft. apply_field()
runs a spec the same way for every key, and FIELD_TABLE fixes the order in
which they run so the first problem in a document is always the same one.

Adding a key means adding a spec and an apply function. Nothing else in
the loader has to change.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import StrictInt, StrictStr, TypeAdapter, ValidationError

from polaris.config.exceptions import (
    AlbumArtPatternParseError,
    ConfigError,
    ConflictingMounts,
    DDNSParseError,
    MountDirsParseError,
    SecretParseError,
    SleepDurationParseError,
    UsersParseError,
)
from polaris.config.schema import (
    DEFAULT_SLEEP_DURATION,
    Config,
    DDNSConfig,
    IndexConfig,
    MountDir,
    User,
    VfsConfig,
)
from polaris.utils.paths import clean_path_string


@dataclass
class ConfigDraft:
    """Mutable staging area filled by the field parsers, then frozen."""

    secret: str = ""
    mount_points: dict[str, Path] = field(default_factory=dict)
    users: list[User] = field(default_factory=list)
    sleep_duration: int = DEFAULT_SLEEP_DURATION
    album_art_pattern: Optional[re.Pattern[str]] = None
    ddns: Optional[DDNSConfig] = None

    def freeze(self, index_path: Path) -> Config:
        return Config(
            secret=self.secret,
            vfs=VfsConfig(mount_points=dict(self.mount_points)),
            users=tuple(self.users),
            index=IndexConfig(
                path=index_path,
                sleep_duration=self.sleep_duration,
                album_art_pattern=self.album_art_pattern,
            ),
            ddns=self.ddns,
        )


@dataclass(frozen=True)
class FieldSpec:
    key: str
    required: bool
    shape: TypeAdapter[Any]
    error: type[ConfigError]
    apply: Callable[[ConfigDraft, Any], None]


def _apply_secret(draft: ConfigDraft, value: str) -> None:
    draft.secret = value


def _apply_sleep_duration(draft: ConfigDraft, value: int) -> None:
    # TOML integers are signed; a negative interval has no meaning.
    if value < 0:
        raise SleepDurationParseError()
    draft.sleep_duration = value


def _apply_mount_dirs(draft: ConfigDraft, value: list[MountDir]) -> None:
    for mount in value:
        if mount.name in draft.mount_points:
            raise ConflictingMounts(mount.name)
        draft.mount_points[mount.name] = clean_path_string(mount.source)


def _apply_users(draft: ConfigDraft, value: list[User]) -> None:
    draft.users.extend(value)


def _apply_album_art_pattern(draft: ConfigDraft, value: str) -> None:
    try:
        draft.album_art_pattern = re.compile(value)
    except re.error as err:
        raise ConfigError.wrap(err) from err


def _apply_ddns(draft: ConfigDraft, value: DDNSConfig) -> None:
    draft.ddns = value


FIELD_TABLE: tuple[FieldSpec, ...] = (
    FieldSpec(
        key="auth_secret",
        required=True,
        shape=TypeAdapter(StrictStr),
        error=SecretParseError,
        apply=_apply_secret,
    ),
    FieldSpec(
        key="reindex_every_n_seconds",
        required=False,
        shape=TypeAdapter(StrictInt),
        error=SleepDurationParseError,
        apply=_apply_sleep_duration,
    ),
    FieldSpec(
        key="mount_dirs",
        required=False,
        shape=TypeAdapter(list[MountDir]),
        error=MountDirsParseError,
        apply=_apply_mount_dirs,
    ),
    FieldSpec(
        key="users",
        required=False,
        shape=TypeAdapter(list[User]),
        error=UsersParseError,
        apply=_apply_users,
    ),
    FieldSpec(
        key="album_art_pattern",
        required=False,
        shape=TypeAdapter(StrictStr),
        error=AlbumArtPatternParseError,
        apply=_apply_album_art_pattern,
    ),
    FieldSpec(
        key="ydns",
        required=False,
        shape=TypeAdapter(DDNSConfig),
        error=DDNSParseError,
        apply=_apply_ddns,
    ),
)

DOCUMENT_KEYS: tuple[str, ...] = tuple(spec.key for spec in FIELD_TABLE)


def apply_field(spec: FieldSpec, document: dict[str, Any], draft: ConfigDraft) -> None:
    """
    Validate one top-level key and store it in the draft.

    A missing optional key is a no-op, so whatever default the draft holds
    is kept. A missing required key or a value of the wrong shape raises
    the spec's error. Shape errors are raised without a cause; the pydantic
    details stay out of the closed error set.

    Raises:
        ConfigError: The spec's error, or whatever its apply step raises.
    """
    if spec.key not in document:
        if spec.required:
            raise spec.error()
        return

    try:
        value = spec.shape.validate_python(document[spec.key])
    except ValidationError:
        raise spec.error() from None

    spec.apply(draft, value)


def apply_fields(document: dict[str, Any], draft: ConfigDraft) -> None:
    """Run every field spec in table order, stopping at the first error."""
    for spec in FIELD_TABLE:
        apply_field(spec, document, draft)
