"""Message catalogs and translation lookup.

Catalogs are JSON files shipped in ``copy_cli/locales``. Keys are the
English source strings; values are either a string or a ``{"one", "other"}``
mapping for pluralized messages. Lookups that miss fall back to the key.
"""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from functools import lru_cache
from importlib import resources

logger = logging.getLogger(__name__)


class Language(str, Enum):
    """Supported interface languages."""

    ENGLISH = "en"
    FRENCH = "fr"
    SPANISH = "es"
    ARABIC = "ar"

    @classmethod
    def default(cls) -> Language:
        """Return the fallback interface language."""
        return cls.ENGLISH

    @classmethod
    def from_environment(cls) -> Language:
        """Derive the language from ``LANG`` (``fr_FR.UTF-8`` -> ``fr``)."""
        raw = os.environ.get("LANG", "")
        code = raw.replace(".", "_").split("_", 1)[0].lower()
        try:
            return cls(code)
        except ValueError:
            return cls.default()

    def label(self) -> str:
        """Native name shown in the language prompt."""
        return _LABELS[self]


_LABELS = {
    Language.ENGLISH: "English",
    Language.FRENCH: "Français",
    Language.SPANISH: "Español",
    Language.ARABIC: "العربية",
}


@lru_cache(maxsize=None)
def load_catalog(language: Language) -> dict[str, object]:
    """Load the message catalog for ``language``; empty if none is shipped."""
    resource = resources.files("copy_cli.locales").joinpath(f"{language.value}.json")
    try:
        return json.loads(resource.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load catalog for %s: %s", language.value, exc)
        return {}


def _format(template: str, args: tuple[object, ...]) -> str:
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError):
        return template


class Translator:
    """Translate message keys for one interface language."""

    def __init__(self, language: Language = Language.ENGLISH) -> None:
        self.language = language
        self._catalog = load_catalog(language)

    def gettext(self, key: str, *args: object) -> str:
        """Translate ``key`` and substitute printf-style ``args``."""
        value = self._catalog.get(key, key)
        if not isinstance(value, str):
            value = key
        return _format(value, args)

    def ngettext(self, singular: str, plural: str, count: int) -> str:
        """Translate a count-dependent message; ``count`` is substituted."""
        entry = self._catalog.get(singular)
        if isinstance(entry, dict):
            form = "one" if count == 1 else "other"
            template = str(entry.get(form) or entry.get("other") or singular)
        else:
            template = singular if count == 1 else plural
        return _format(template, (count,))

    __call__ = gettext
