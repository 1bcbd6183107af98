"""Scenewright command line interface."""

from scenewright.cli.main import app, main

__all__ = ["app", "main"]
