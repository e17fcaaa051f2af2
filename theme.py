"""Light/dark theme preference, persisted to a small JSON file."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import streamlit as st

import config

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
THEME_KEY = "theme"


@dataclass(frozen=True)
class ThemeSettings:
    mode: str = LIGHT

    def __post_init__(self):
        if self.mode not in (LIGHT, DARK):
            raise ValueError(f"Unknown theme mode: {self.mode!r}")

    @property
    def dark(self) -> bool:
        return self.mode == DARK

    def toggle(self) -> "ThemeSettings":
        return ThemeSettings(LIGHT if self.dark else DARK)


class ThemeStore:
    """Key-value file holding the theme preference."""

    def __init__(self, path=None):
        self.path = Path(path or config.THEME_SETTINGS_PATH)

    def load(self, fallback: ThemeSettings) -> ThemeSettings:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("No theme preference at %s, using %s", self.path, fallback.mode)
            return fallback
        except (OSError, ValueError) as e:
            logger.warning("Could not read theme preference %s: %s", self.path, e)
            return fallback

        mode = data.get(THEME_KEY) if isinstance(data, dict) else None
        if mode not in (LIGHT, DARK):
            logger.warning("Ignoring unknown theme value %r in %s", mode, self.path)
            return fallback
        return ThemeSettings(mode)

    def save(self, settings: ThemeSettings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({THEME_KEY: settings.mode}), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save theme preference to %s: %s", self.path, e)
            return
        logger.debug("Saved theme preference %s to %s", settings.mode, self.path)


def host_theme_hint() -> ThemeSettings:
    """Colour scheme the host is configured with, light when unset."""
    base = st.get_option("theme.base")
    return ThemeSettings(DARK if base == DARK else LIGHT)
