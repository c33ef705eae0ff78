"""Interactive read-eval loop for the calculator agent."""
from __future__ import annotations

import logging
from typing import Callable

from toolagent.agent import Agent, create_agent
from toolagent.config import configure_logging, get_groq_api_key

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def run_repl(
    agent: Agent,
    read: Callable[[str], str] = input,
    write: Callable[..., None] = print,
) -> None:
    """Ask for user turns until ``exit`` or end of input, printing each reply."""
    while True:
        try:
            text = read("User: ")
        except EOFError:
            break

        if text == EXIT_COMMAND:
            break
        if not text.strip():
            continue

        write("Agent: ", agent.run(text))


def main() -> None:
    configure_logging()
    # Fail at startup rather than on the first turn.
    get_groq_api_key()
    agent = create_agent()
    logger.info("🤖 Agent started. Type 'exit' to quit.")
    try:
        run_repl(agent)
    except KeyboardInterrupt:
        logger.info("🤖 Bye!")


if __name__ == "__main__":
    main()
