"""Tool specifications and registry utilities for the agent runtime."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Type

from pydantic import BaseModel


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Metadata wrapper used by the agent to invoke tools in a uniform way."""

    name: str
    description: str
    args_schema: Type[BaseModel]
    fn: Callable[..., Any]

    def invoke(self, args: Any) -> Any:
        """
        Validate ``args`` against the input schema, then run the tool body.

        Raises
        ------
        pydantic.ValidationError
            If the arguments do not match the schema. The body is not run.
        """
        validated = self.args_schema.model_validate(args)
        return self.fn(**validated.model_dump())

    def to_groq(self) -> Dict[str, Any]:
        """Render the function-calling descriptor expected by chat completions."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.args_schema.model_json_schema(),
            },
        }


def build_registry(specs: Iterable[ToolSpec]) -> Dict[str, ToolSpec]:
    """Index tool specs by name, rejecting duplicates."""
    registry: Dict[str, ToolSpec] = {}
    for spec in specs:
        if spec.name in registry:
            raise ValueError(f"Tool '{spec.name}' is registered more than once.")
        registry[spec.name] = spec
    return registry


def default_tools() -> Dict[str, ToolSpec]:
    """Registry of the calculator tools plus the error simulator."""
    from toolagent.tools.error_tool import test_error_tool
    from toolagent.tools.math_tools import add_tool, divide_tool, multiply_tool

    return build_registry([add_tool, multiply_tool, divide_tool, test_error_tool])
