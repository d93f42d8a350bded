import pytest

from locabridge.errors import DecodeError
from locabridge.extraction import ChineseKeyExtractor, contains_han
from locabridge.models.catalog import CatalogEntry, TranslationCatalog
from locabridge.models.json_value import JsonKind, from_python, parse_json


def test_extract_nested_keys():
    tree = from_python({"你好": 1, "world": {"再见": "x"}})

    assert ChineseKeyExtractor().extract(tree) == {"你好", "再见"}


def test_extract_walks_arrays_and_deduplicates():
    tree = parse_json('[{"设置": {"设置": true}}, [{"关于 app": null}], "值不算"]')

    assert ChineseKeyExtractor().extract(tree) == {"设置", "关于 app"}


def test_values_alone_are_not_keys():
    tree = from_python({"title": "标题"})

    assert ChineseKeyExtractor().extract(tree) == set()


def test_scalar_root_yields_nothing():
    assert ChineseKeyExtractor().extract(from_python(42)) == set()


def test_json_value_tags():
    tree = from_python({"a": [True, 1, 1.5, None, "s"]})

    kinds = [item.kind for item in tree.members["a"].items]
    assert tree.kind is JsonKind.OBJECT
    assert kinds == [JsonKind.BOOL, JsonKind.NUMBER, JsonKind.NUMBER, JsonKind.NULL, JsonKind.STRING]


def test_contains_han():
    assert contains_han("abc中")
    assert contains_han("\u3005")
    assert contains_han("\u3007")
    assert contains_han("\u2f08")
    assert contains_han("\U00030000")
    assert contains_han("\U00031350")
    assert not contains_han("こんにちは")
    assert not contains_han("hello")


def test_extract_catalog():
    catalog = TranslationCatalog(source_language="zh-Hans")
    catalog.add_entry(CatalogEntry(key="确定", translations={"zh-Hans": "确定"}))
    catalog.add_entry(CatalogEntry(key="ok", translations={"zh-Hans": "好"}))

    assert ChineseKeyExtractor().extract_catalog(catalog) == {"确定"}


def test_extract_file_and_write_keys(tmp_path):
    source = tmp_path / "zh.json"
    source.write_text('{"菜单": {"文件": "File", "edit": "编辑"}}', encoding="utf-8")
    output = tmp_path / "out" / "keys.txt"
    extractor = ChineseKeyExtractor()

    keys = extractor.write_keys(extractor.extract_file(str(source)), str(output))

    assert keys == sorted(["菜单", "文件"])
    assert output.read_text(encoding="utf-8").splitlines() == keys


def test_extract_file_invalid_json(tmp_path):
    source = tmp_path / "broken.json"
    source.write_text("{", encoding="utf-8")

    with pytest.raises(DecodeError, match="broken.json"):
        ChineseKeyExtractor().extract_file(str(source))
