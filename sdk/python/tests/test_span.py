"""Tests for the span and attribute value model."""

import threading

import pytest

from agentbill.tracing.span import (
    AttributeKind,
    AttributeValue,
    Span,
    SpanStatusCode,
)


class TestAttributeValue:
    def test_string(self):
        attr = AttributeValue.of("gpt-4o-mini")
        assert attr.kind is AttributeKind.STRING
        assert attr.to_otlp() == {"stringValue": "gpt-4o-mini"}

    def test_int(self):
        attr = AttributeValue.of(42)
        assert attr.kind is AttributeKind.INT
        assert attr.to_otlp() == {"intValue": 42}

    def test_bool_is_not_int(self):
        attr = AttributeValue.of(True)
        assert attr.kind is AttributeKind.BOOL
        assert attr.to_otlp() == {"boolValue": True}

    def test_float_is_stringified(self):
        attr = AttributeValue.of(0.5)
        assert attr.kind is AttributeKind.STRING
        assert attr.value == "0.5"

    def test_other_types_are_stringified(self):
        assert AttributeValue.of(None).value == "None"
        assert AttributeValue.of(["a", "b"]).value == "['a', 'b']"

    def test_int_outside_64_bits_is_stringified(self):
        attr = AttributeValue.of(2**64)
        assert attr.kind is AttributeKind.STRING
        assert attr.value == str(2**64)

    def test_existing_value_passes_through(self):
        attr = AttributeValue.of(7)
        assert AttributeValue.of(attr) is attr


class TestSpan:
    def setup_method(self):
        self.span = Span("openai.chat.completion", {"model": "gpt-4o-mini"})

    def test_ids(self):
        assert len(self.span.trace_id) == 32
        assert len(self.span.span_id) == 16
        int(self.span.trace_id, 16)
        int(self.span.span_id, 16)

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Span("")

    def test_initial_state(self):
        assert self.span.end_time == 0
        assert not self.span.is_ended
        assert self.span.status.code == SpanStatusCode.OK
        assert self.span.start_time > 0

    def test_set_attribute_last_write_wins(self):
        self.span.set_attribute("latency_ms", 10)
        self.span.set_attribute("latency_ms", 20)
        assert self.span.attributes["latency_ms"] == 20

    def test_set_status_pair(self):
        self.span.set_status(SpanStatusCode.ERROR, "boom")
        assert self.span.status.code == 1
        assert self.span.status.message == "boom"
        self.span.set_status(0)
        assert self.span.status.code == 0
        assert self.span.status.message == ""

    def test_unknown_status_code_passes_through(self):
        self.span.set_status(7, "custom")
        assert self.span.status.code == 7

    def test_end_is_idempotent(self):
        self.span.end()
        first = self.span.end_time
        self.span.end()
        assert self.span.end_time == first
        assert first >= self.span.start_time

    def test_end_never_before_start(self):
        span = Span("op", start_time=1_000)
        span.end(end_time=500)
        assert span.end_time == 1_000

    def test_mutation_after_end(self):
        self.span.end()
        self.span.set_attribute("late", True)
        assert self.span.attributes["late"] is True

    def test_snapshot_is_a_copy(self):
        data = self.span.snapshot()
        self.span.set_attribute("later", 1)
        assert "later" not in data.attributes
        assert data.name == "openai.chat.completion"
        assert data.attributes["model"].value == "gpt-4o-mini"

    def test_concurrent_attribute_writes(self):
        def writer(offset):
            for i in range(200):
                self.span.set_attribute(f"k{offset}-{i}", i)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        # 8 writers x 200 keys + the initial model attribute
        assert len(self.span.attributes) == 1601
