"""Settings dataclass and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from ..ui.models.workspace_models import DEFAULT_THEME, THEME_MODES, ThemeMode

__all__ = [
    "Settings",
    "SettingsStore",
    "ThemePreference",
    "normalize_theme",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".codealchemy"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "CODEALCHEMY_THEME": "theme",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "CODEALCHEMY_DEBUG_LOGGING": "debug_logging",
    "CODEALCHEMY_AUTO_SELECT_FIRST_VISIBLE": "auto_select_first_visible",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "CODEALCHEMY_TRANSITION_DELAY_MS": "transition_delay_ms",
    "CODEALCHEMY_TOAST_LIFETIME_MS": "toast_lifetime_ms",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


@dataclass(slots=True)
class Settings:
    """User-configurable settings persisted between sessions."""

    theme: str = DEFAULT_THEME
    debug_logging: bool = False
    transition_delay_ms: int = 300
    typing_quiet_period_ms: int = 500
    toast_lifetime_ms: int = 2000
    toast_max_entries: int = 5
    copy_reset_ms: int = 1800
    auto_select_first_visible: bool = True


def normalize_theme(value: Any) -> ThemeMode:
    """Coerce a stored theme value, defaulting to dark for anything unknown."""

    normalized = str(value or "").strip().lower()
    if normalized in THEME_MODES:
        return normalized  # type: ignore[return-value]
    if normalized:
        LOGGER.warning("Unknown theme '%s'; defaulting to %s.", value, DEFAULT_THEME)
    return DEFAULT_THEME


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self) -> Settings:
        """Load settings from disk, then apply environment overrides."""

        payload = self._read_payload()
        settings = Settings()
        if payload:
            data = _filter_fields(payload)
            try:
                settings = Settings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
            LOGGER.debug("Settings loaded from %s (keys=%s)", self._path, sorted(data))

        settings = self._apply_env_overrides(settings)
        return replace(settings, theme=normalize_theme(settings.theme))

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        self._write_payload(payload)
        LOGGER.debug("Settings saved to %s (theme=%s)", self._path, settings.theme)
        return self._path

    def save_theme(self, theme: str) -> Path:
        """Rewrite only the ``theme`` key, leaving every other stored value as it is on disk."""

        payload = self._read_payload()
        payload["theme"] = theme
        payload["version"] = _SETTINGS_VERSION
        self._write_payload(payload)
        LOGGER.debug("Theme preference saved to %s (theme=%s)", self._path, theme)
        return self._path

    def _write_payload(self, payload: Mapping[str, Any]) -> None:
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain a JSON object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {field.name for field in fields(Settings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in allowed or value is None:
                continue
            filtered[key] = value
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        for env_name, field_name in _INT_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = int(value, 10)
            except ValueError:
                LOGGER.warning(
                    "Environment override %s=%s is not a valid integer",
                    env_name,
                    value,
                )
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


class ThemePreference:
    """The persisted ``theme`` key: read once at start-up, written on every toggle."""

    def __init__(self, store: SettingsStore | None, settings: Settings) -> None:
        self._store = store
        self._settings = settings
        self._theme = normalize_theme(settings.theme)

    @property
    def settings(self) -> Settings:
        return self._settings

    def get(self) -> ThemeMode:
        return self._theme

    def set(self, theme: str) -> ThemeMode:
        if theme not in THEME_MODES:
            raise ValueError(f"Unsupported theme '{theme}'")
        self._theme = theme  # type: ignore[assignment]
        self._settings.theme = theme
        if self._store is not None:
            try:
                self._store.save_theme(self._theme)
            except OSError as exc:
                LOGGER.warning("Unable to persist theme preference: %s", exc)
        return self._theme


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {field.name for field in fields(Settings)}
    return {key: value for key, value in payload.items() if key in allowed}
