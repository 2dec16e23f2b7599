from __future__ import annotations

from typing import Any

from fastapi import Response
from pydantic import BaseModel

from mentor.core.canonicalize import canonical_bytes, model_payload

SUCCESS = "success"
SUCCESS_FROM_CACHE = "success (from cache)"


def json_bytes_response(payload: bytes, status_code: int | None = None) -> Response:
    if status_code is None:
        return Response(content=payload, media_type="application/json")
    return Response(content=payload, media_type="application/json", status_code=status_code)


def _wire(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return model_payload(value)
    if isinstance(value, list):
        return [_wire(item) for item in value]
    return value


def success_response(
    data: dict[str, Any] | list[Any] | None,
    status_code: int = 200,
    from_cache: bool = False,
) -> Response:
    """Render the success envelope ``{"status": ..., "data": ...}``.

    Models inside ``data`` are dumped with their camelCase aliases.
    """
    if isinstance(data, dict):
        data = {name: _wire(value) for name, value in data.items()}
    else:
        data = _wire(data)
    envelope = {"status": SUCCESS_FROM_CACHE if from_cache else SUCCESS, "data": data}
    return json_bytes_response(canonical_bytes(envelope), status_code)


def no_content() -> Response:
    return Response(status_code=204)
