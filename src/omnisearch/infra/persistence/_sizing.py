import json
from typing import Any


def dump_value(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def record_size(key: str, dumped: str) -> int:
    """Bytes charged for one entry: UTF-8 key plus its JSON-encoded value."""
    return len(key.encode("utf-8")) + len(dumped.encode("utf-8"))
