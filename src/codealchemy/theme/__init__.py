"""Workspace palettes and their Qt application."""

from .manager import ThemeManager, theme_manager
from .palette import DARK_PALETTE, LIGHT_PALETTE, Palette

__all__ = ["DARK_PALETTE", "LIGHT_PALETTE", "Palette", "ThemeManager", "theme_manager"]
