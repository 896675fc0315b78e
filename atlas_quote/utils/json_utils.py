import json
import re
import logging
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(key: str) -> str:
    """
    Convert "classDrop", "Class Drop" or "class-drop" to "class_drop".
    """
    key = _CAMEL_BOUNDARY.sub("_", key.strip())
    return re.sub(r"[\s\-]+", "_", key).lower()


def normalize_keys(data: Any) -> Any:
    """
    Recursively normalize dictionary keys to snake_case.
    Lists are walked item by item; scalars pass through.
    """
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    if not isinstance(data, dict):
        return data

    new_data = {}
    for k, v in data.items():
        new_data[to_snake_case(str(k))] = normalize_keys(v)
    return new_data


def read_json_file(path: Union[str, Path]) -> Any:
    """
    Read a JSON document and normalize its keys.
    Raises OSError or ValueError on missing or malformed files.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    logger.debug(f"Loaded {path}")
    return normalize_keys(data)
