"""Arithmetic tools exposed to the model."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from toolagent.tools import ToolSpec

logger = logging.getLogger(__name__)


class BinaryArgs(BaseModel):
    a: float = Field(description="First number")
    b: float = Field(description="Second number")


class DivideArgs(BaseModel):
    a: float = Field(description="First number (dividend)")
    b: float = Field(description="Second number (divisor) - cannot be zero")


def add(a: float, b: float) -> float:
    logger.info("Adding %s %s", a, b)
    return a + b


def multiply(a: float, b: float) -> float:
    logger.info("Multiplying %s %s", a, b)
    return a * b


def divide(a: float, b: float) -> float:
    """Divide ``a`` by ``b``; a zero divisor is rejected with ZeroDivisionError."""
    logger.info("Dividing %s %s", a, b)
    if b == 0:
        raise ZeroDivisionError("Division by zero is not allowed!")
    return a / b


add_tool = ToolSpec(
    name="add",
    description="Add two numbers",
    args_schema=BinaryArgs,
    fn=add,
)

multiply_tool = ToolSpec(
    name="multiply",
    description="Multiply two numbers",
    args_schema=BinaryArgs,
    fn=multiply,
)

divide_tool = ToolSpec(
    name="divide",
    description="Divide two numbers",
    args_schema=DivideArgs,
    fn=divide,
)
