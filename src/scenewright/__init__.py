"""Scenewright: guided screenplay development.

A ten-stage workflow takes a screenplay from synopsis to formatted draft, with
content guards on every forward step, and compiles the result to Fountain,
Final Draft XML and PDF.
"""

__version__ = "0.1.0"
__author__ = "Scenewright Contributors"

__all__ = ["__version__"]
