"""Concrete infrastructure implementations and shared helpers."""

from .io.filesystem import LocalFileSystem

__all__ = ["LocalFileSystem"]
