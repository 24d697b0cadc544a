"""Persisted interface language preference."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal, get_args

from cbc_portal.core.settings import settings

logger = logging.getLogger(__name__)

Locale = Literal["en", "rw"]

SUPPORTED_LOCALES: tuple[str, ...] = get_args(Locale)
FALLBACK_LOCALE: Locale = "en"
STORAGE_KEY = "cbc-ur-language"


class UnsupportedLocaleError(ValueError):
    """Raised when asked to store a language the portal does not offer."""


class LocalePreference:
    """Language choice stored as JSON under a fixed key."""

    def __init__(self, path: Path | None = None, *, default: str | None = None) -> None:
        self.path = Path(path or settings.preferences_path)
        candidate = default or settings.default_locale
        self.default: Locale = candidate if candidate in SUPPORTED_LOCALES else FALLBACK_LOCALE  # type: ignore[assignment]
        self.current: Locale = self.default

    def _read(self) -> dict:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read preferences %s: %s", self.path, exc)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed preferences file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Locale:
        """Read the stored language, falling back to the default."""
        stored = self._read().get(STORAGE_KEY)
        self.current = stored if stored in SUPPORTED_LOCALES else self.default
        return self.current

    def set(self, locale: str) -> Locale:
        """Store ``locale`` as the user's explicit choice."""
        if locale not in SUPPORTED_LOCALES:
            raise UnsupportedLocaleError(f"Unsupported language: {locale}")
        data = self._read()
        data[STORAGE_KEY] = locale
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self.current = locale  # type: ignore[assignment]
        logger.info("Language preference set to %s", locale)
        return self.current
