"""Agent loop: chat completions with function calling, tools routed through middleware."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from groq import Groq

from toolagent.config import (
    DEFAULT_MAX_STEPS,
    DEFAULT_TEMPERATURE,
    get_groq_api_key,
    get_groq_model,
)
from toolagent.middleware import (
    DEFAULT_MIDDLEWARE,
    ToolCall,
    ToolCallRequest,
    ToolMessage,
    ToolMiddleware,
    build_chain,
)
from toolagent.tools import ToolSpec, build_registry, default_tools

logger = logging.getLogger(__name__)

STEP_LIMIT_MESSAGE = "Sorry, I could not finish within the allowed number of steps."


def _build_groq(client: Optional[Groq]) -> Groq:
    """Return a Groq client, building one if not injected."""
    if client is not None:
        return client
    return Groq(api_key=get_groq_api_key())


def _decode_arguments(raw: Any) -> Any:
    """Decode a tool call's JSON arguments; undecodable text is kept as-is for validation to reject."""
    if raw is None or raw == "":
        return {}
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


class Agent:
    """Tool-using chat agent that runs one conversation turn per ``invoke``."""

    def __init__(
        self,
        tools: Union[Mapping[str, ToolSpec], Iterable[ToolSpec]],
        middleware: Sequence[ToolMiddleware] = (),
        client: Optional[Groq] = None,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_steps: int = DEFAULT_MAX_STEPS,
        system_prompt: Optional[str] = None,
    ) -> None:
        if isinstance(tools, Mapping):
            self.tools = dict(tools)
        else:
            self.tools = build_registry(tools)
        self.middleware = tuple(middleware)
        self.client = _build_groq(client)
        self.model = model or get_groq_model()
        self.temperature = temperature
        self.max_steps = max_steps
        self.system_prompt = system_prompt
        self._call_tool = build_chain(self.middleware)

    # --------------------------------------------------------------------- run
    def invoke(self, inputs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run one turn.

        Parameters
        ----------
        inputs : dict
            ``{"messages": [{"role": ..., "content": ...}, ...]}``

        Returns
        -------
        dict
            ``{"messages": [...]}`` with the input messages followed by every
            assistant and tool message of the turn. The last one is the reply.
        """
        messages: List[Dict[str, Any]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.extend(dict(message) for message in inputs.get("messages", []))

        for _ in range(self.max_steps):
            reply = self._complete(messages)
            tool_calls = list(getattr(reply, "tool_calls", None) or [])
            messages.append(self._assistant_message(reply, tool_calls))
            if not tool_calls:
                break
            for raw_call in tool_calls:
                outcome = self._dispatch(raw_call)
                messages.append(outcome.to_dict())
        else:
            logger.warning("Agent stopped after %d steps with tool calls still pending.", self.max_steps)
            messages.append({"role": "assistant", "content": STEP_LIMIT_MESSAGE})

        return {"messages": messages}

    def run(self, text: str) -> str:
        """Send a single user message and return the agent's final text."""
        result = self.invoke({"messages": [{"role": "user", "content": text}]})
        return result["messages"][-1].get("content") or ""

    # ------------------------------------------------------------ model call
    def _complete(self, messages: List[Dict[str, Any]]) -> Any:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }
        if self.tools:
            kwargs["tools"] = [spec.to_groq() for spec in self.tools.values()]
            kwargs["tool_choice"] = "auto"
        completion = self.client.chat.completions.create(**kwargs)
        return completion.choices[0].message

    @staticmethod
    def _assistant_message(reply: Any, tool_calls: List[Any]) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": "assistant", "content": reply.content or ""}
        if tool_calls:
            message["tool_calls"] = [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {
                        "name": call.function.name,
                        "arguments": call.function.arguments,
                    },
                }
                for call in tool_calls
            ]
        return message

    # ------------------------------------------------------------ tool call
    def _dispatch(self, raw_call: Any) -> ToolMessage:
        """Route one model tool call through the middleware chain."""
        call = ToolCall(
            name=raw_call.function.name,
            args=_decode_arguments(raw_call.function.arguments),
            id=raw_call.id,
        )
        request = ToolCallRequest(tool_call=call, tool=self.tools.get(call.name))
        return self._call_tool(request)


def create_agent(client: Optional[Groq] = None, model: Optional[str] = None) -> Agent:
    """Assemble the demo agent: calculator tools, logging around error handling."""
    return Agent(
        tools=default_tools(),
        middleware=DEFAULT_MIDDLEWARE,
        client=client,
        model=model,
    )
