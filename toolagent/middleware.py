"""
Tool-call middleware: wrappers applied around every tool invocation.

Design
- A link is a function ``(request, handler) -> ToolMessage``; ``handler`` runs
  the rest of the chain including the real tool.
- ``build_chain`` nests links right-to-left, so the first listed link is the
  outermost: it sees the request first and the outcome last.
- A link either calls its handler once or short-circuits with its own outcome.
"""
from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from toolagent.tools import ToolSpec

logger = logging.getLogger(__name__)

TOOL_ERROR_TEMPLATE = "Tool error: Please check your input and try again. ({error})"


class ToolNotFoundError(LookupError):
    """Raised when the model asks for a tool that is not registered."""


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A tool call as requested by the model."""

    name: str
    args: Any
    id: str


@dataclass(frozen=True, slots=True)
class ToolCallRequest:
    """Pending invocation handed to each middleware link."""

    tool_call: ToolCall
    tool: Optional[ToolSpec] = None

    def override(self, **changes: Any) -> "ToolCallRequest":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(slots=True)
class ToolMessage:
    """Outcome of a tool call, genuine or substituted for a failure."""

    content: str
    tool_call_id: str
    name: str
    status: str = "success"

    def to_dict(self) -> Dict[str, Any]:
        """Render as a chat-completions ``tool`` message."""
        return {
            "role": "tool",
            "tool_call_id": self.tool_call_id,
            "name": self.name,
            "content": self.content,
        }


Handler = Callable[[ToolCallRequest], ToolMessage]
WrapToolCall = Callable[[ToolCallRequest, Handler], ToolMessage]


@dataclass(frozen=True, slots=True)
class ToolMiddleware:
    """A named link in the tool-call chain."""

    name: str
    wrap_tool_call: WrapToolCall

    def __call__(self, request: ToolCallRequest, handler: Handler) -> ToolMessage:
        return self.wrap_tool_call(request, handler)


def tool_middleware(name: str) -> Callable[[WrapToolCall], ToolMiddleware]:
    """Decorator turning a ``(request, handler)`` function into a ToolMiddleware."""

    def decorator(fn: WrapToolCall) -> ToolMiddleware:
        return ToolMiddleware(name=name, wrap_tool_call=fn)

    return decorator


def execute_tool(request: ToolCallRequest) -> ToolMessage:
    """Innermost handler: run the tool body and wrap its value."""
    call = request.tool_call
    if request.tool is None:
        raise ToolNotFoundError(f"Tool '{call.name}' is not registered.")
    value = request.tool.invoke(call.args)
    return ToolMessage(content=str(value), tool_call_id=call.id, name=call.name)


def _call_once(link: ToolMiddleware, handler: Handler) -> Handler:
    """Bind ``link`` around ``handler``; the handler may run once per invocation."""

    def invoke(request: ToolCallRequest) -> ToolMessage:
        called = False

        def next_handler(next_request: ToolCallRequest) -> ToolMessage:
            nonlocal called
            if called:
                raise RuntimeError(f"Middleware '{link.name}' called its handler more than once.")
            called = True
            return handler(next_request)

        return link(request, next_handler)

    return invoke


def build_chain(middleware: Sequence[ToolMiddleware], handler: Handler = execute_tool) -> Handler:
    """
    Compose ``middleware`` around ``handler``.

    The first element is the outermost link. The returned callable is reused
    for every invocation; links hold no per-call state.
    """
    chained = handler
    for link in reversed(tuple(middleware)):
        chained = _call_once(link, chained)
    return chained


@tool_middleware("HandleToolErrors")
def handle_tool_errors(request: ToolCallRequest, handler: Handler) -> ToolMessage:
    """Turn any failure below this link into an error ToolMessage."""
    try:
        return handler(request)
    except Exception as exc:
        call = request.tool_call
        logger.warning("Tool '%s' failed (call %s)", call.name, call.id, exc_info=True)
        return ToolMessage(
            content=TOOL_ERROR_TEMPLATE.format(error=exc),
            tool_call_id=call.id,
            name=call.name,
            status="error",
        )


@tool_middleware("LoggingMiddleware")
def logging_middleware(request: ToolCallRequest, handler: Handler) -> ToolMessage:
    """Log the call on entry and the outcome with its duration on exit."""
    call = request.tool_call
    start = time.perf_counter()
    logger.info("🔧 Tool: %s 📥 Input: %s", call.name, call.args)

    try:
        result = handler(request)
    except Exception as exc:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("❌ Failed in %.0fms 📤 Error: %r", duration_ms, exc)
        raise

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("✅ Completed in %.0fms 📤 Output: %s", duration_ms, result)
    return result


# Logging listed before error handling so the logger only ever sees translated outcomes.
DEFAULT_MIDDLEWARE = (logging_middleware, handle_tool_errors)
