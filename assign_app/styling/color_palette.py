"""Color palette for the admin console, in light and dark variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Slate surfaces with an emerald accent; amber marks pending work."""

    TEXT_PRIMARY = ThemeColors(light="#334155", dark="#E2E8F0")
    TEXT_MUTED = ThemeColors(light="#64748B", dark="#94A3B8")

    SURFACE = ThemeColors(light="#FFFFFF", dark="#0F172A")
    SURFACE_ALT = ThemeColors(light="#F8FAFC", dark="#1E293B")
    BORDER = ThemeColors(light="#E2E8F0", dark="#334155")

    ACCENT = ThemeColors(light="#10B981", dark="#34D399")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#0F172A")
    HOVER = ThemeColors(light="#F1F5F9", dark="#334155")

    # Review status badges
    PENDING = ThemeColors(light="#B45309", dark="#FBBF24")
    REVIEWED = ThemeColors(light="#047857", dark="#34D399")
    ERROR = ThemeColors(light="#DC2626", dark="#F87171")
