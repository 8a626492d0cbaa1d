"""User interface layer for the CHIP-8 interpreter."""

from .app import AppConfig, Chip8App, KEY_MAP

__all__ = ["AppConfig", "Chip8App", "KEY_MAP"]
