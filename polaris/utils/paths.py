# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for Polaris.

Mount sources in polaris.toml are often written on one OS and read on
another, so a config may say `C:\\Music` on Linux or `/srv/music` on
Windows. Nothing here touches the filesystem.
"""

import os
import re
from pathlib import Path

_SEPARATORS = re.compile(r"[\\/]+")


def clean_path_string(path_string: str) -> Path:
    """
    Turn a path written with either separator into a native Path.

    Runs of `/` and `\\` are treated as one component boundary and empty
    components are dropped, so trailing separators disappear. A leading
    separator keeps the result anchored at the native root. The path is
    not checked for existence.

    Args:
        path_string: Raw path as written in the config file.

    Returns:
        The same path built from native components.
    """
    components = [part for part in _SEPARATORS.split(path_string) if part]
    if _SEPARATORS.match(path_string):
        components.insert(0, os.sep)
    return Path(*components)

