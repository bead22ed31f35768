#!/usr/bin/env python3
"""
ArpSweep - Tests for translations.
"""

from arpsweep.utils import i18n
from arpsweep.utils.i18n import TRANSLATIONS, detect_preferred_language, get_text


def test_languages_share_keys():
    assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["es"])


def test_get_text_formats_arguments():
    assert get_text("hosts_found", "en", 3, 5.04) == "3 host(s) found in 5.0s"
    assert get_text("invalid_cidr", "es", "x") == "CIDR inválido: x"


def test_get_text_unknown_language_and_key():
    assert get_text("scan_ok", "fr") == TRANSLATIONS["en"]["scan_ok"]
    assert get_text("no_such_key", "en") == "no_such_key"


def test_detect_explicit_preference():
    assert detect_preferred_language("es") == "es"


def test_detect_from_environment(monkeypatch):
    monkeypatch.setenv("LC_ALL", "es_ES.UTF-8")
    assert detect_preferred_language("fr") == "es"


def test_detect_falls_back_to_english(monkeypatch):
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.setenv(var, "C.UTF-8")
    monkeypatch.setattr(i18n.locale, "getlocale", lambda: (None, None))
    assert detect_preferred_language() == "en"
