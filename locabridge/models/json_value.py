"""Tagged JSON value tree used by the key extractor."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


@dataclass
class JsonValue:
    """One node of a JSON document; exactly one payload field is meaningful per kind."""

    kind: JsonKind
    members: Dict[str, "JsonValue"] = field(default_factory=dict)
    items: List["JsonValue"] = field(default_factory=list)
    scalar: Optional[Union[str, int, float, bool]] = None

    @classmethod
    def object(cls, members: Dict[str, "JsonValue"]) -> "JsonValue":
        return cls(kind=JsonKind.OBJECT, members=members)

    @classmethod
    def array(cls, items: List["JsonValue"]) -> "JsonValue":
        return cls(kind=JsonKind.ARRAY, items=items)

    @classmethod
    def string(cls, value: str) -> "JsonValue":
        return cls(kind=JsonKind.STRING, scalar=value)

    @classmethod
    def number(cls, value: Union[int, float]) -> "JsonValue":
        return cls(kind=JsonKind.NUMBER, scalar=value)

    @classmethod
    def boolean(cls, value: bool) -> "JsonValue":
        return cls(kind=JsonKind.BOOL, scalar=value)

    @classmethod
    def null(cls) -> "JsonValue":
        return cls(kind=JsonKind.NULL)


def from_python(data: Any) -> JsonValue:
    """Convert the output of ``json.loads`` into a tagged tree."""
    if isinstance(data, dict):
        return JsonValue.object({str(k): from_python(v) for k, v in data.items()})
    if isinstance(data, list):
        return JsonValue.array([from_python(item) for item in data])
    if isinstance(data, str):
        return JsonValue.string(data)
    # bool is a subclass of int, so it must be checked first
    if isinstance(data, bool):
        return JsonValue.boolean(data)
    if isinstance(data, (int, float)):
        return JsonValue.number(data)
    if data is None:
        return JsonValue.null()
    raise TypeError(f"Not a JSON value: {type(data).__name__}")


def parse_json(text: str) -> JsonValue:
    """Parse JSON text into a tagged tree. Raises ``json.JSONDecodeError``."""
    return from_python(json.loads(text))
