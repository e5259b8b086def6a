# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Polaris media server: startup configuration loading."""

__version__ = "0.4.0"
