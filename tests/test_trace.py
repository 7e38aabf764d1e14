from yandexgpt_chat import TokenUsage, Trace, TraceStep


def test_trace_roundtrip() -> None:
    trace = Trace(steps=[])
    trace.add(
        TraceStep(
            step_id=1,
            llm_type="yandexgpt",
            message_count=3,
            usage=TokenUsage(total_tokens=12),
        )
    )
    trace.add(
        TraceStep(
            step_id=2,
            llm_type="yandexgpt",
            message_count=1,
            error="TransportError: Failed to fetch",
        )
    )

    raw = trace.to_json()
    restored = Trace.from_json(raw)
    assert len(restored.steps) == 2
    assert restored.steps[0].usage == TokenUsage(total_tokens=12)
    assert restored.steps[1].usage is None
    assert restored.steps[1].error.startswith("TransportError")
    assert restored.total_tokens == 12
    assert restored.next_step_id() == 3
