from __future__ import annotations

from dataclasses import dataclass, asdict
import json

from .messages import TokenUsage


@dataclass
class TraceStep:
    step_id: int
    llm_type: str
    message_count: int
    usage: TokenUsage | None = None
    error: str | None = None


@dataclass
class Trace:
    steps: list[TraceStep]

    def add(self, step: TraceStep) -> None:
        self.steps.append(step)

    def next_step_id(self) -> int:
        return len(self.steps) + 1

    @property
    def total_tokens(self) -> int:
        return sum(step.usage.total_tokens for step in self.steps if step.usage)

    def to_json(self) -> str:
        def serialize(step: TraceStep) -> dict:
            data = asdict(step)
            if step.usage:
                data["usage"] = step.usage.to_dict()
            return data

        payload = [serialize(step) for step in self.steps]
        return json.dumps(payload, ensure_ascii=True, indent=2)

    @classmethod
    def from_json(cls, raw: str) -> "Trace":
        items = json.loads(raw)
        steps: list[TraceStep] = []
        for item in items:
            usage_data = item.get("usage")
            usage = TokenUsage.from_dict(usage_data) if usage_data else None
            steps.append(
                TraceStep(
                    step_id=item["step_id"],
                    llm_type=item["llm_type"],
                    message_count=item.get("message_count", 0),
                    usage=usage,
                    error=item.get("error"),
                )
            )
        return cls(steps=steps)
