"""Utility helpers for Scenewright."""

from scenewright.utils.screenplay import ScreenplayUtils

__all__ = ["ScreenplayUtils"]
