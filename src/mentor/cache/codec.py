"""Serialization contract for cached thread views.

Every cached value is a JSON envelope:

    {"v": 1, "kind": "thread", "gen": 4, "data": {...}}

- v: schema version of the payload; bumped whenever a cached model changes
- kind: which view the payload holds ("thread" or "thread_list")
- gen: generation of the key at the time the reader fetched from the store
- data: the view in its wire form (camelCase, ids as strings)

Decoding never raises. Anything that cannot be trusted is reported as a
miss so the caller falls back to the store.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError

from mentor.core.canonicalize import canonical_bytes, model_payload
from mentor.core.model import Thread, ThreadSummary

logger = logging.getLogger(__name__)

CACHE_SCHEMA_VERSION = 1

_thread_list_adapter: TypeAdapter[list[ThreadSummary]] = TypeAdapter(list[ThreadSummary])


class EnvelopeKind(str, Enum):
    """Payload kind stored in a cache envelope."""

    THREAD = "thread"
    THREAD_LIST = "thread_list"


class CacheEnvelope(BaseModel):
    """Versioned wrapper around a cached payload."""

    model_config = {"extra": "forbid"}

    v: int
    kind: EnvelopeKind
    gen: int
    data: Any


class CacheCodec:
    """Encode and validate cached thread views."""

    def __init__(self, version: int = CACHE_SCHEMA_VERSION):
        self.version = version

    def _encode(self, kind: EnvelopeKind, generation: int, data: Any) -> bytes:
        return canonical_bytes(
            {"v": self.version, "kind": kind.value, "gen": generation, "data": data}
        )

    def encode_thread(self, thread: Thread, generation: int) -> bytes:
        return self._encode(EnvelopeKind.THREAD, generation, model_payload(thread))

    def encode_thread_list(self, threads: list[ThreadSummary], generation: int) -> bytes:
        return self._encode(
            EnvelopeKind.THREAD_LIST, generation, [model_payload(t) for t in threads]
        )

    def _open(self, raw: bytes, kind: EnvelopeKind, generation: int) -> Any | None:
        """Validate the envelope and return its raw payload, or None on a miss."""
        try:
            envelope = CacheEnvelope.model_validate(orjson.loads(raw))
        except (orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Discarding malformed cache envelope: %s", e)
            return None

        if envelope.v != self.version:
            logger.info(
                "Cache schema version %s does not match %s, treating as miss",
                envelope.v,
                self.version,
            )
            return None
        if envelope.kind != kind:
            logger.warning("Cache envelope holds %s, expected %s", envelope.kind.value, kind.value)
            return None
        if envelope.gen != generation:
            logger.debug(
                "Cache entry generation %s is stale (current %s)", envelope.gen, generation
            )
            return None
        return envelope.data

    def decode_thread(self, raw: bytes, generation: int) -> Thread | None:
        data = self._open(raw, EnvelopeKind.THREAD, generation)
        if data is None:
            return None
        try:
            return Thread.model_validate(data)
        except ValidationError as e:
            logger.warning("Cached thread failed validation: %s", e)
            return None

    def decode_thread_list(self, raw: bytes, generation: int) -> list[ThreadSummary] | None:
        data = self._open(raw, EnvelopeKind.THREAD_LIST, generation)
        if data is None:
            return None
        try:
            return _thread_list_adapter.validate_python(data)
        except ValidationError as e:
            logger.warning("Cached thread list failed validation: %s", e)
            return None
