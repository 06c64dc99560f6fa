"""Dark and light palettes for the workspace shell."""

from __future__ import annotations

from dataclasses import dataclass, fields

from ..ui.models.workspace_models import ThemeMode


@dataclass(frozen=True, slots=True)
class Palette:
    """Hex colors for every surface the shell paints.

    Field names double as the placeholders used in the style sheet template.
    """

    mode: ThemeMode
    background: str
    surface: str
    surface_alt: str
    border: str
    foreground: str
    text_muted: str
    accent: str
    accent_foreground: str
    selection: str
    skeleton: str
    toast_background: str
    toast_foreground: str

    def rgb(self, role: str) -> tuple[int, int, int]:
        value = getattr(self, role).lstrip("#")
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)

    def colors(self) -> dict[str, str]:
        return {field.name: getattr(self, field.name) for field in fields(self) if field.name != "mode"}


DARK_PALETTE = Palette(
    mode="dark",
    background="#111217",
    surface="#1a1b22",
    surface_alt="#242630",
    border="#343744",
    foreground="#ecedf2",
    text_muted="#9498a8",
    accent="#7c5cff",
    accent_foreground="#ffffff",
    selection="#3a2c78",
    skeleton="#2c2e3a",
    toast_background="#219653",
    toast_foreground="#ffffff",
)

LIGHT_PALETTE = Palette(
    mode="light",
    background="#f6f6fa",
    surface="#ffffff",
    surface_alt="#eeeef4",
    border="#d4d5de",
    foreground="#1c1d24",
    text_muted="#626574",
    accent="#6240e6",
    accent_foreground="#ffffff",
    selection="#e2dbff",
    skeleton="#e4e5ec",
    toast_background="#219653",
    toast_foreground="#ffffff",
)


__all__ = ["DARK_PALETTE", "LIGHT_PALETTE", "Palette"]
