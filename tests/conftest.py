import json
from pathlib import Path

import pytest


class FakeProvider:
    """Translates by tagging each text with the target language."""

    name = "fake"

    def __init__(self, fail_with=None):
        self.calls = []
        self.fail_with = fail_with

    def translate_batch(self, texts, target_lang, source_lang=None):
        self.calls.append((list(texts), target_lang, source_lang))
        if self.fail_with is not None:
            raise self.fail_with
        return [f"[{target_lang}] {text}" for text in texts]


@pytest.fixture
def provider():
    return FakeProvider()


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def xcstrings_data():
    return {
        "sourceLanguage": "en",
        "version": "1.0",
        "strings": {
            "greeting": {
                "comment": "Shown on the home screen",
                "extractionState": "manual",
                "localizations": {
                    "en": {"stringUnit": {"state": "translated", "value": "Hello"}},
                    "fr": {"stringUnit": {"state": "needs_review", "value": "Bonjour"}},
                },
            },
            "farewell": {
                "localizations": {
                    "en": {"stringUnit": {"state": "translated", "value": "Goodbye"}},
                },
            },
        },
    }


@pytest.fixture
def provider_factory():
    return FakeProvider
