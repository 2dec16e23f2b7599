from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel

ORJSON_OPTIONS = orjson.OPT_NON_STR_KEYS | orjson.OPT_UTC_Z


def canonical_bytes(data: Any) -> bytes:
    """Return canonical JSON bytes for already-validated data."""
    return orjson.dumps(data, option=ORJSON_OPTIONS)


def model_payload(model: BaseModel) -> dict[str, Any]:
    """Dump a model to its JSON-compatible wire form (camelCase aliases)."""
    return model.model_dump(by_alias=True, mode="json")
