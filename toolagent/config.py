"""
Central configuration for the calculator agent and the workflow demo.
Loads environment variables from a .env file at import time.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# --- Load .env early so everything importing config sees the vars ---
load_dotenv()

#: Environment variable names
GROQ_API_KEY_ENV = "GROQ_API_KEY"
GROQ_MODEL_ENV = "GROQ_MODEL"
LOG_LEVEL_ENV = "LOG_LEVEL"

#: Model used when GROQ_MODEL is not set.
DEFAULT_GROQ_MODEL = "llama-3.3-70b-versatile"

#: Sampling temperature for agent turns.
DEFAULT_TEMPERATURE = 0.0

#: Maximum model round-trips per user turn.
DEFAULT_MAX_STEPS = 5

#: Where the workflow graph picture is written.
GRAPH_IMAGE_PATH = Path.cwd() / "biryaniState.png"

#: Superstep budget for one graph run; each extra tasting loop costs two.
GRAPH_RECURSION_LIMIT = 200


def require_env(var_name: str) -> str:
    """
    Return the value of an environment variable or raise a clear error.

    Raises
    ------
    RuntimeError
        If the environment variable is missing or empty.
    """
    try:
        value = os.environ[var_name]
    except KeyError as exc:
        raise RuntimeError(f"Required environment variable '{var_name}' is not set.") from exc
    if not value:
        raise RuntimeError(f"Environment variable '{var_name}' is empty.")
    return value


def get_groq_api_key() -> str:
    """
    Convenience accessor specifically for the Groq API key.
    """
    return require_env(GROQ_API_KEY_ENV)


def get_groq_model() -> str:
    """Return the configured Groq model, falling back to the default."""
    return os.environ.get(GROQ_MODEL_ENV) or DEFAULT_GROQ_MODEL


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging for the command-line entry points."""
    resolved = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(level=resolved, format="%(message)s")
