import json
import types
from typing import Any, Dict, List, Optional

import pytest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def tool_call(name: str, args: Any, call_id: str) -> types.SimpleNamespace:
    """Build a chat-completions tool call; dict args are JSON-encoded like the API does."""
    arguments = json.dumps(args) if isinstance(args, dict) else args
    return types.SimpleNamespace(
        id=call_id,
        type="function",
        function=types.SimpleNamespace(name=name, arguments=arguments),
    )


class DummyChoice:
    def __init__(self, content: Optional[str], tool_calls: Optional[List[Any]] = None):
        self.message = types.SimpleNamespace(content=content, tool_calls=tool_calls)


class DummyCompletion:
    def __init__(self, content: Optional[str], tool_calls: Optional[List[Any]] = None):
        self.choices = [DummyChoice(content, tool_calls)]


class DummyGroq:
    """
    Minimal mock for groq.Groq that supports:
    client.chat.completions.create(...)

    Replays ``replies`` in order; each reply is either a string (final answer)
    or a list of tool calls. The last reply repeats once the script runs out.
    """
    def __init__(self, *replies: Any):
        self._replies = list(replies) or [""]
        self.requests: List[Dict[str, Any]] = []
        self.chat = types.SimpleNamespace(
            completions=types.SimpleNamespace(create=self._create)
        )

    def _create(self, **kwargs):
        # Snapshot the messages; the agent keeps appending to the same list.
        self.requests.append({**kwargs, "messages": [dict(m) for m in kwargs["messages"]]})
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, list):
            return DummyCompletion(None, reply)
        return DummyCompletion(reply)


@pytest.fixture(autouse=True)
def set_env(monkeypatch):
    """
    Automatically set the model and key env vars for all tests.
    """
    monkeypatch.setenv("GROQ_MODEL", "dummy-model")
    monkeypatch.setenv("GROQ_API_KEY", "dummy-key")
    yield
