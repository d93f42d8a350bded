import json

from conftest import write_json

from locabridge.errors import TranslationError
from locabridge.models.catalog import PlatformType
from locabridge.pipeline import ConversionRequest, Converter
from locabridge.translation import CatalogTranslator


def _converter(provider):
    return Converter(translator=CatalogTranslator(provider))


def test_xcstrings_gains_new_language(tmp_path, provider, xcstrings_data):
    source = write_json(tmp_path / "Localizable.xcstrings", xcstrings_data)
    output = tmp_path / "out" / "Localizable.xcstrings"

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.IOS,
        input_path=str(source),
        output_path=str(output),
        languages=["ja"],
    ))

    assert result.success, result.message
    assert result.items == 2
    assert result.written == [str(output)]
    data = json.loads(output.read_text(encoding="utf-8"))
    greeting = data["strings"]["greeting"]
    assert greeting["localizations"]["ja"] == {"stringUnit": {"value": "[ja] Hello"}}
    assert greeting["localizations"]["fr"] == {"stringUnit": {"state": "needs_review", "value": "Bonjour"}}
    assert greeting["comment"] == "Shown on the home screen"
    assert greeting["extractionState"] == "manual"


def test_sync_to_source_overwrites_input(tmp_path, provider, xcstrings_data):
    source = write_json(tmp_path / "Localizable.xcstrings", xcstrings_data)

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.IOS,
        input_path=str(source),
        output_path=str(tmp_path / "copy.xcstrings"),
        languages=["de"],
        sync_to_source=True,
    ))

    assert result.success
    assert len(result.written) == 2
    data = json.loads(source.read_text(encoding="utf-8"))
    assert data["strings"]["farewell"]["localizations"]["de"]["stringUnit"]["value"] == "[de] Goodbye"


def test_strings_writes_one_file_per_language(tmp_path, provider):
    source = tmp_path / "en.strings"
    source.write_text('"title" = "Settings";\n"bad line\n', encoding="utf-8")
    out_dir = tmp_path / "out"

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.IOS,
        input_path=str(source),
        output_path=str(out_dir),
        languages=["fr", "de"],
    ))

    assert result.success, result.message
    assert (out_dir / "fr.strings").read_text(encoding="utf-8") == '"title" = "[fr] Settings";\n'
    assert (out_dir / "de.strings").read_text(encoding="utf-8") == '"title" = "[de] Settings";\n'
    assert "1 items" in result.message


def test_arb_output_keeps_metadata(tmp_path, provider):
    source = write_json(tmp_path / "app_en.arb", {
        "@@locale": "en",
        "hello": "Hello",
        "@hello": {"description": "Greeting"},
    })

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.FLUTTER,
        input_path=str(source),
        output_path=str(tmp_path / "l10n"),
        languages=["es"],
    ))

    assert result.success, result.message
    data = json.loads((tmp_path / "l10n" / "es.arb").read_text(encoding="utf-8"))
    assert data == {"@@locale": "es", "hello": "[es] Hello", "@hello": {"description": "Greeting"}}


def test_validation_fails_before_decoding(tmp_path, provider):
    source = tmp_path / "app_en.arb"
    source.write_text("this is not json", encoding="utf-8")

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(tmp_path / "out"),
        languages=["fr"],
    ))

    assert not result.success
    assert result.stage == "validate"
    assert provider.calls == []


def test_decode_failure_names_file(tmp_path, provider):
    source = tmp_path / "en.json"
    source.write_text("{broken", encoding="utf-8")

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(tmp_path / "out"),
        languages=["fr"],
    ))

    assert result.stage == "decode"
    assert "en.json" in result.message


def test_empty_catalog_is_reported(tmp_path, provider):
    source = write_json(tmp_path / "en.json", {})

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(tmp_path / "out"),
        languages=["fr"],
    ))

    assert not result.success
    assert "No translatable content" in result.message


def test_translation_failure_writes_nothing(tmp_path, provider_factory):
    source = write_json(tmp_path / "en.json", {"hello": "Hello"})
    failing = provider_factory(fail_with=TranslationError("service unavailable"))

    result = _converter(failing).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(tmp_path / "out"),
        languages=["fr"],
    ))

    assert result.stage == "translate"
    assert "service unavailable" in result.message
    assert not (tmp_path / "out").exists()


def test_write_failures_are_aggregated(tmp_path, provider):
    source = write_json(tmp_path / "en.json", {"hello": "Hello"})
    out_dir = tmp_path / "out"
    (out_dir / "fr.json").mkdir(parents=True)

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(out_dir),
        languages=["fr", "de"],
    ))

    assert not result.success
    assert result.stage == "write"
    assert [f.language for f in result.failures] == ["fr"]
    assert result.written == [str(out_dir / "de.json")]
    assert json.loads((out_dir / "de.json").read_text(encoding="utf-8")) == {"hello": "[de] Hello"}


def test_export_alongside_conversion(tmp_path, provider):
    source = write_json(tmp_path / "en.json", {"hello": "Hello"})
    out_dir = tmp_path / "out"

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(out_dir),
        languages=["fr"],
        export="csv",
    ))

    assert result.success
    assert result.export_path == str(out_dir / "en.csv")
    text = (out_dir / "en.csv").read_text(encoding="utf-8-sig")
    assert text.splitlines() == ["Key,en,fr", '"hello","Hello","[fr] Hello"']


def test_dry_run_writes_nothing(tmp_path, provider):
    source = write_json(tmp_path / "en.json", {"hello": "Hello"})

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(tmp_path / "out"),
        languages=["fr"],
        dry_run=True,
    ))

    assert result.success
    assert result.stats[0].translated == 1
    assert not (tmp_path / "out").exists()


def test_converter_without_translator_reencodes(tmp_path):
    source = write_json(tmp_path / "en.json", {"hello": "Hello"})

    result = Converter().convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(tmp_path / "out"),
        languages=["en"],
    ))

    assert result.success
    assert json.loads((tmp_path / "out" / "en.json").read_text(encoding="utf-8")) == {"hello": "Hello"}


def test_export_only(tmp_path, xcstrings_data):
    source = write_json(tmp_path / "Localizable.xcstrings", xcstrings_data)
    output = tmp_path / "table.csv"

    result = Converter().export(ConversionRequest(
        platform=PlatformType.IOS,
        input_path=str(source),
        output_path=str(output),
    ))

    assert result.success
    assert output.read_text(encoding="utf-8-sig").splitlines()[0] == "Key,en,fr"


def test_empty_source_value_is_not_translated_from_key(tmp_path, provider):
    source = write_json(tmp_path / "en.json", {"hello": "Hello", "login_button": ""})
    out_dir = tmp_path / "out"

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(out_dir),
        languages=["fr"],
    ))

    assert result.success, result.message
    assert json.loads((out_dir / "fr.json").read_text(encoding="utf-8")) == {"hello": "[fr] Hello"}
    assert provider.calls == [(["Hello"], "fr", "en")]


def test_xcstrings_key_without_source_value_is_translated(tmp_path, provider):
    data = {"sourceLanguage": "en", "version": "1.0", "strings": {"Done": {}}}
    source = write_json(tmp_path / "Localizable.xcstrings", data)
    output = tmp_path / "out.xcstrings"

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.IOS,
        input_path=str(source),
        output_path=str(output),
        languages=["fr"],
    ))

    assert result.success, result.message
    encoded = json.loads(output.read_text(encoding="utf-8"))
    assert encoded["strings"]["Done"]["localizations"]["fr"] == {"stringUnit": {"value": "[fr] Done"}}


def test_write_and_export_failures_are_both_reported(tmp_path, provider):
    source = write_json(tmp_path / "en.json", {"hello": "Hello"})
    out_dir = tmp_path / "out"
    (out_dir / "fr.json").mkdir(parents=True)
    (out_dir / "en.csv").mkdir()

    result = _converter(provider).convert(ConversionRequest(
        platform=PlatformType.ELECTRON,
        input_path=str(source),
        output_path=str(out_dir),
        languages=["fr"],
        export="csv",
    ))

    assert not result.success
    assert result.stage == "write"
    assert result.export_path is None
    assert "1 of 1 file(s) not written" in result.message
    assert "export also failed" in result.message
    assert "Cannot write export" in result.message
