"""Find keys written in Chinese (Han script) inside JSON documents and catalogs."""

import logging
import re
from pathlib import Path
from typing import List, Set

from ..errors import DecodeError, EncodeError
from ..models.catalog import TranslationCatalog
from ..models.json_value import JsonKind, JsonValue, parse_json

logger = logging.getLogger(__name__)

# Han script: radicals, ideographic iteration mark and number signs, CJK Unified
# Ideographs with Extensions A-I, and Compatibility Ideographs
HAN_RE = re.compile(
    "[\u2e80-\u2fdf\u3005\u3007\u3021-\u3029\u3038-\u303b"
    "\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"
    "\U00020000-\U0002a6df\U0002a700-\U0002ee5f"
    "\U0002f800-\U0002fa1f\U00030000-\U000323af]"
)


def contains_han(text: str) -> bool:
    return HAN_RE.search(text) is not None


class ChineseKeyExtractor:
    """Collects object keys containing at least one Han character."""

    def extract(self, value: JsonValue) -> Set[str]:
        """Walk a JSON tree and return every matching object key, at any depth."""
        found: Set[str] = set()
        stack = [value]
        while stack:
            node = stack.pop()
            if node.kind is JsonKind.OBJECT:
                for key, child in node.members.items():
                    if contains_han(key):
                        found.add(key)
                    stack.append(child)
            elif node.kind is JsonKind.ARRAY:
                stack.extend(node.items)
        return found

    def extract_catalog(self, catalog: TranslationCatalog) -> Set[str]:
        """Catalog keys containing Han characters."""
        return {key for key in catalog.entries if contains_han(key)}

    def extract_file(self, path: str) -> Set[str]:
        file_path = Path(path)
        try:
            tree = parse_json(file_path.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError) as e:
            raise DecodeError(f"Cannot read file: {e}", path=path, format_name="json") from e
        except ValueError as e:
            raise DecodeError(f"Invalid JSON: {e}", path=path, format_name="json") from e
        return self.extract(tree)

    def write_keys(self, keys: Set[str], output_path: str) -> List[str]:
        """Write keys one per line, sorted, and return them in that order."""
        ordered = sorted(keys)
        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("\n".join(ordered), encoding="utf-8")
        except OSError as e:
            raise EncodeError(f"Cannot write keys: {e}", path=output_path) from e
        logger.info("Wrote %d Chinese keys to %s", len(ordered), output_path)
        return ordered
