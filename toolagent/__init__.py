"""Tool-calling calculator agent with middleware, plus a toy workflow graph."""
