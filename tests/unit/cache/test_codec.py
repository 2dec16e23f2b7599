"""Tests for the cache envelope codec."""

from __future__ import annotations

import orjson

from mentor.cache.codec import CACHE_SCHEMA_VERSION, CacheCodec
from mentor.core.model import Thread
from tests.factories import make_message, make_thread, make_user, summarize


class TestThreadEnvelope:
    """Test encoding and decoding of single-thread entries."""

    def test_envelope_shape(self, thread: Thread) -> None:
        """Encoded value carries version, kind, generation and camelCase data."""
        raw = CacheCodec().encode_thread(thread, 3)
        envelope = orjson.loads(raw)
        assert envelope["v"] == CACHE_SCHEMA_VERSION
        assert envelope["kind"] == "thread"
        assert envelope["gen"] == 3
        assert envelope["data"]["id"] == thread.id
        assert "createdAt" in envelope["data"]

    def test_decode_matches_original(self) -> None:
        """A populated thread decodes back to an equal model."""
        asha = make_user("Asha")
        thread = make_thread([asha], messages=[make_message(asha.id, "hi")])
        codec = CacheCodec()
        assert codec.decode_thread(codec.encode_thread(thread, 0), 0) == thread

    def test_encoding_is_deterministic(self, thread: Thread) -> None:
        """Same thread and generation encode to identical bytes."""
        codec = CacheCodec()
        assert codec.encode_thread(thread, 1) == codec.encode_thread(thread, 1)


class TestThreadListEnvelope:
    """Test encoding and decoding of per-user thread lists."""

    def test_decode_is_structurally_equal(self, thread: Thread) -> None:
        """Cached and re-decoded list equals the fresh one."""
        threads = [summarize(thread), summarize(make_thread())]
        codec = CacheCodec()
        assert codec.decode_thread_list(codec.encode_thread_list(threads, 2), 2) == threads

    def test_empty_list(self) -> None:
        """An empty list is a valid cached value."""
        codec = CacheCodec()
        assert codec.decode_thread_list(codec.encode_thread_list([], 0), 0) == []


class TestMisses:
    """Anything that cannot be trusted decodes as a miss."""

    def test_generation_mismatch(self, thread: Thread) -> None:
        """Entry tagged with an older generation is a miss."""
        codec = CacheCodec()
        assert codec.decode_thread(codec.encode_thread(thread, 1), 2) is None

    def test_version_mismatch(self, thread: Thread) -> None:
        """Entry written by another schema version is a miss."""
        raw = CacheCodec(version=CACHE_SCHEMA_VERSION + 1).encode_thread(thread, 0)
        assert CacheCodec().decode_thread(raw, 0) is None

    def test_kind_mismatch(self, thread: Thread) -> None:
        """A list envelope is not accepted as a single thread."""
        codec = CacheCodec()
        raw = codec.encode_thread_list([summarize(thread)], 0)
        assert codec.decode_thread(raw, 0) is None

    def test_malformed_json(self) -> None:
        """Bytes that are not JSON are a miss."""
        assert CacheCodec().decode_thread(b"not json", 0) is None

    def test_legacy_bare_payload(self, thread: Thread) -> None:
        """A bare thread document without envelope is a miss."""
        raw = orjson.dumps(thread.model_dump(by_alias=True, mode="json"))
        assert CacheCodec().decode_thread(raw, 0) is None

    def test_payload_failing_validation(self) -> None:
        """Envelope with a payload missing required fields is a miss."""
        raw = orjson.dumps({"v": CACHE_SCHEMA_VERSION, "kind": "thread", "gen": 0, "data": {}})
        assert CacheCodec().decode_thread(raw, 0) is None

    def test_payload_with_unknown_field(self, thread: Thread) -> None:
        """Payload carrying fields the model does not know is a miss."""
        data = thread.model_dump(by_alias=True, mode="json")
        data["legacy"] = True
        raw = orjson.dumps({"v": CACHE_SCHEMA_VERSION, "kind": "thread", "gen": 0, "data": data})
        assert CacheCodec().decode_thread(raw, 0) is None
