"""Centralised version and naming information for Camera Tween.

This module is the single source of truth for the application name and
version so the entry point and packaging do not duplicate strings.
"""
from __future__ import annotations


APP_NAME: str = "CameraTween"
APP_VERSION: str = "0.3.0"
APP_DESCRIPTION: str = "Time-driven camera position/target animation with a serial step queue."


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
]
