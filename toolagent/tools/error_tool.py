"""Error simulator used to exercise the tool error handling path."""

from __future__ import annotations

import logging
from typing import Dict, Literal, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from toolagent.tools import ToolSpec

logger = logging.getLogger(__name__)

ErrorType = Literal["generic", "validation", "timeout", "network"]

ERRORS: Dict[str, Tuple[Type[Exception], str]] = {
    "generic": (RuntimeError, "This is a generic error for testing!"),
    "validation": (ValueError, "Validation failed: Input is invalid!"),
    "timeout": (TimeoutError, "Operation timed out!"),
    "network": (ConnectionError, "Network error: Could not connect to service!"),
}


class ErrorTypeArgs(BaseModel):
    # The model sees the camelCase name; Python code uses error_type.
    model_config = ConfigDict(populate_by_name=True)

    error_type: ErrorType = Field(
        alias="errorType",
        description="Type of error to throw: generic, validation, timeout, or network"
    )


def raise_test_error(error_type: str) -> None:
    """Always raise; the exception class and message depend on ``error_type``."""
    logger.info("Testing error type: %s", error_type)
    exc_type, message = ERRORS.get(error_type, (RuntimeError, "Unknown error type!"))
    raise exc_type(message)


test_error_tool = ToolSpec(
    name="testError",
    description="A test tool that throws different types of errors. Use this to test error handling.",
    args_schema=ErrorTypeArgs,
    fn=raise_test_error,
)
