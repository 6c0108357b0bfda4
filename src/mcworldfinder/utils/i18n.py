from __future__ import annotations

"""
Internationalization (i18n) Utility.

Centralized catalog of user-facing CLI strings. Messages live in JSON
files under 'interface/locales' and are looked up with dot-notation keys.
A key missing from the active locale falls back to English, then to the
key itself, so a broken catalog never breaks a search.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "interface", "locales")
)


class I18n:
    """Resource manager for locale-specific string lookups."""

    def __init__(self, locale: str = DEFAULT_LOCALE, locales_dir: str = LOCALES_DIR):
        self._locales_dir = locales_dir
        self._fallback: Dict[str, Any] = self._read_catalog(DEFAULT_LOCALE) or {}
        self._translations: Dict[str, Any] = {}
        self.locale = DEFAULT_LOCALE
        self.load_locale(locale)

    def load_locale(self, locale: str) -> None:
        """
        Activate a locale; unknown locales leave English active.

        Args:
            locale: ISO identifier for the target language.
        """
        catalog = self._read_catalog(locale)
        if catalog is None:
            logger.debug(f"I18n: Locale '{locale}' unavailable; using '{DEFAULT_LOCALE}'.")
            self._translations = self._fallback
            self.locale = DEFAULT_LOCALE
            return
        self._translations = catalog
        self.locale = locale

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        """
        Resolve and format a message by its dot-notation key.

        Args:
            key: Hierarchical identifier path (e.g., 'cli.status.done').
            default: Text used when the key is missing from every catalog.
            **kwargs: Variables interpolated with str.format.

        Returns:
            str: The formatted message, 'default', or the key itself.
        """
        template = _lookup(self._translations, key)
        if template is None:
            template = _lookup(self._fallback, key)
        if template is None:
            template = default if default is not None else key

        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Formatting failed for '{key}': {e}")
            return template

    def _read_catalog(self, locale: str) -> Optional[Dict[str, Any]]:
        path = os.path.join(self._locales_dir, f"{locale}.json")
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Unreadable locale file {path}: {e}")
            return None
        return data if isinstance(data, dict) else None


def _lookup(catalog: Dict[str, Any], key: str) -> Optional[str]:
    current: Any = catalog
    for part in key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current if isinstance(current, str) else None


# Global singleton instance for application-wide resource access
i18n = I18n(DEFAULT_LOCALE)
