import copy

from locabridge.models.catalog import CatalogEntry, TranslationCatalog
from locabridge.translation import TranslationMerger


def _catalog():
    catalog = TranslationCatalog(source_language="en")
    catalog.add_entry(CatalogEntry(
        key="greeting",
        translations={"en": "Hello", "fr": "Bonjour"},
        comment="Home screen",
        extraction_state="manual",
        states={"en": "translated", "fr": "needs_review"},
    ))
    catalog.add_entry(CatalogEntry(key="farewell", translations={"en": "Goodbye"}))
    return catalog


NEW = {
    "greeting": {"ja": "こんにちは", "fr": "Salut", "en": "Hi there"},
    "farewell": {"ja": "さようなら"},
    "brand_new": {"ja": "新しい"},
}


def test_merge_upserts_target_languages():
    catalog = TranslationMerger().merge(_catalog(), NEW)

    assert catalog.entries["greeting"].translations == {
        "en": "Hello", "fr": "Salut", "ja": "こんにちは",
    }
    assert catalog.entries["farewell"].translations["ja"] == "さようなら"


def test_merge_never_writes_source_language():
    catalog = TranslationMerger().merge(_catalog(), NEW)

    assert catalog.entries["greeting"].translations["en"] == "Hello"


def test_merge_creates_missing_keys_with_only_that_language():
    catalog = TranslationMerger().merge(_catalog(), NEW)

    entry = catalog.entries["brand_new"]
    assert entry.translations == {"ja": "新しい"}
    assert entry.comment is None
    assert entry.states == {}


def test_merge_leaves_metadata_untouched():
    catalog = TranslationMerger().merge(_catalog(), NEW)

    entry = catalog.entries["greeting"]
    assert entry.comment == "Home screen"
    assert entry.extraction_state == "manual"
    assert entry.states == {"en": "translated", "fr": "needs_review"}
    assert "ja" not in entry.states


def test_merge_is_idempotent():
    merger = TranslationMerger()
    once = merger.merge(_catalog(), NEW)
    twice = merger.merge(merger.merge(_catalog(), NEW), NEW)

    assert once == twice


def test_merge_preserves_languages_not_in_update():
    original = _catalog()
    merged = TranslationMerger().merge(copy.deepcopy(original), {"farewell": {"de": "Tschüss"}})

    assert merged.entries["greeting"] == original.entries["greeting"]
    assert merged.entries["farewell"].translations["en"] == "Goodbye"


def test_merge_source_language_argument_overrides_catalog():
    catalog = TranslationMerger().merge(_catalog(), {"farewell": {"fr": "Au revoir"}}, source_language="fr")

    assert "fr" not in catalog.entries["farewell"].translations


def test_source_only_update_for_unknown_key_creates_nothing():
    catalog = TranslationMerger().merge(_catalog(), {"ghost": {"en": "Boo"}})

    assert "ghost" not in catalog.entries


def test_caller_can_mark_state_after_merge():
    catalog = TranslationMerger().merge(_catalog(), NEW)

    catalog.entries["farewell"].set_translation("ja", "さらば", state="needs_review")

    assert catalog.entries["farewell"].translations["ja"] == "さらば"
    assert catalog.entries["farewell"].states == {"ja": "needs_review"}
    assert catalog.get_untranslated_keys("ja") == []
    assert catalog.get_untranslated_keys("fr") == ["brand_new", "farewell"]
