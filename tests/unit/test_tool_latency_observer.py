from pydantic import BaseModel

from hybrid_agent.agent.registry import ToolRegistry, ToolSpec


class EchoInput(BaseModel):
    text: str


def _registry() -> ToolRegistry:
    registry = ToolRegistry()

    def _handler(data: EchoInput) -> str:
        return data.text.upper()

    registry.register(
        ToolSpec(
            name="echo",
            description="uppercase",
            args_schema=EchoInput,
            handler=_handler,
        )
    )
    return registry


def test_tool_observer_captures_latency_and_payload() -> None:
    registry = _registry()

    observed = []
    registry.set_observer(observed.append)
    result = registry.execute("echo", {"text": "hello"})
    registry.set_observer(None)

    assert result == "HELLO"
    assert len(observed) == 1
    assert observed[0].name == "echo"
    assert observed[0].input_payload == {"text": "hello"}
    assert observed[0].output_preview == "HELLO"
    assert observed[0].latency_ms >= 0.0


def test_per_call_observer_only_sees_its_own_call() -> None:
    registry = _registry()

    first, second = [], []
    registry.execute("echo", {"text": "a"}, observer=first.append)
    registry.execute("echo", {"text": "b"}, observer=second.append)

    assert [trace.output_preview for trace in first] == ["A"]
    assert [trace.output_preview for trace in second] == ["B"]
