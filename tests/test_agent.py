from typing import List

import pytest

from toolagent.agent import STEP_LIMIT_MESSAGE, Agent, create_agent
from toolagent.middleware import DEFAULT_MIDDLEWARE
from toolagent.tools import default_tools
from tests.conftest import DummyGroq, tool_call


def make_agent(*replies, middleware=DEFAULT_MIDDLEWARE, max_steps: int = 5) -> Agent:
    """Build an Agent over the demo tools driven by a scripted Groq mock."""
    return Agent(
        tools=default_tools(),
        middleware=middleware,
        client=DummyGroq(*replies),
        model="dummy",
        max_steps=max_steps,
    )


def tool_messages(messages: List[dict]) -> List[dict]:
    return [m for m in messages if m["role"] == "tool"]


def test_agent_answers_without_tools():
    agent = make_agent("Hello there!")
    result = agent.invoke({"messages": [{"role": "user", "content": "hi"}]})

    assert result["messages"][0] == {"role": "user", "content": "hi"}
    assert result["messages"][-1] == {"role": "assistant", "content": "Hello there!"}
    assert tool_messages(result["messages"]) == []


def test_agent_sends_tool_descriptors():
    agent = make_agent("ok")
    agent.run("hi")

    request = agent.client.requests[0]
    assert request["model"] == "dummy"
    assert request["temperature"] == 0.0
    assert request["tool_choice"] == "auto"
    names = [t["function"]["name"] for t in request["tools"]]
    assert names == ["add", "multiply", "divide", "testError"]


def test_agent_tool_round_trip():
    agent = make_agent(
        [tool_call("add", {"a": 2, "b": 3}, "call_add")],
        "2 + 3 = 5",
    )
    result = agent.invoke({"messages": [{"role": "user", "content": "what is 2 + 3?"}]})
    messages = result["messages"]

    assert [m["role"] for m in messages] == ["user", "assistant", "tool", "assistant"]
    assert messages[1]["tool_calls"][0]["id"] == "call_add"
    assert messages[1]["tool_calls"][0]["function"]["name"] == "add"
    assert messages[2] == {"role": "tool", "tool_call_id": "call_add", "name": "add", "content": "5.0"}
    assert messages[-1]["content"] == "2 + 3 = 5"

    # the second model call sees the tool outcome
    second = agent.client.requests[1]["messages"]
    assert second[-1]["tool_call_id"] == "call_add"


def test_agent_divide_by_zero_keeps_turn_alive():
    agent = make_agent(
        [tool_call("divide", {"a": 1, "b": 0}, "call_div")],
        "You cannot divide by zero.",
    )
    text = agent.run("divide 1 by 0")

    assert text == "You cannot divide by zero."
    tool_msg = tool_messages(agent.client.requests[1]["messages"])[0]
    assert tool_msg["tool_call_id"] == "call_div"
    assert "Division by zero is not allowed!" in tool_msg["content"]


def test_agent_multiple_tool_calls_in_one_turn():
    agent = make_agent(
        [
            tool_call("multiply", {"a": 6, "b": 7}, "call_mul"),
            tool_call("testError", {"errorType": "network"}, "call_err"),
            tool_call("divide", {"a": 9, "b": 3}, "call_div"),
        ],
        "done",
    )
    result = agent.invoke({"messages": [{"role": "user", "content": "go"}]})
    tools = tool_messages(result["messages"])

    assert [m["tool_call_id"] for m in tools] == ["call_mul", "call_err", "call_div"]
    assert tools[0]["content"] == "42.0"
    assert "Network error: Could not connect to service!" in tools[1]["content"]
    assert tools[2]["content"] == "3.0"


def test_agent_handles_unknown_tool_and_bad_json():
    agent = make_agent(
        [
            tool_call("subtract", {"a": 1, "b": 2}, "call_sub"),
            tool_call("add", "{not json", "call_bad"),
        ],
        "sorry",
    )
    result = agent.invoke({"messages": [{"role": "user", "content": "go"}]})
    tools = tool_messages(result["messages"])

    assert tools[0]["tool_call_id"] == "call_sub"
    assert "not registered" in tools[0]["content"]
    assert tools[1]["tool_call_id"] == "call_bad"
    assert tools[1]["content"].startswith("Tool error:")
    assert result["messages"][-1]["content"] == "sorry"


def test_agent_without_middleware_propagates_tool_failure():
    agent = make_agent([tool_call("divide", {"a": 1, "b": 0}, "c")], "never", middleware=())
    with pytest.raises(ZeroDivisionError):
        agent.run("divide 1 by 0")


def test_agent_step_limit():
    agent = make_agent([tool_call("add", {"a": 1, "b": 1}, "loop")], max_steps=3)
    result = agent.invoke({"messages": [{"role": "user", "content": "loop forever"}]})

    assert len(agent.client.requests) == 3
    assert len(tool_messages(result["messages"])) == 3
    assert result["messages"][-1] == {"role": "assistant", "content": STEP_LIMIT_MESSAGE}


def test_agent_system_prompt_is_sent_first():
    agent = Agent(
        tools=list(default_tools().values()),
        client=DummyGroq("ok"),
        model="dummy",
        system_prompt="You are a calculator.",
    )
    agent.run("hi")
    sent = agent.client.requests[0]["messages"]
    assert sent[0] == {"role": "system", "content": "You are a calculator."}
    assert sent[1] == {"role": "user", "content": "hi"}


def test_create_agent_uses_env_model_and_default_order():
    agent = create_agent(client=DummyGroq("ok"))
    assert agent.model == "dummy-model"
    assert agent.middleware == DEFAULT_MIDDLEWARE
    assert set(agent.tools) == {"add", "multiply", "divide", "testError"}
