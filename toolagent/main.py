"""
Streamlit entry-point for the calculator agent.

Responsibilities
- Build one agent per browser session
- Send each chat input through the agent (tools + middleware)
- Render a simple chat interface
"""
from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from toolagent.agent import Agent, create_agent

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

APOLOGY = "Sorry, something went wrong while handling your request."


def _get_agent() -> Agent:
    if "agent_instance" not in st.session_state:
        st.session_state["agent_instance"] = create_agent()
    return st.session_state["agent_instance"]


def ask(query: str, agent: Optional[Agent] = None) -> str:
    """
    Run one agent turn for ``query`` and return the reply text.

    ``agent`` defaults to the session agent, built on first use.

    Tool failures are already turned into tool messages by the middleware;
    anything raised here is a provider or configuration failure, which is
    logged and answered with an apology.
    """
    try:
        return (agent or _get_agent()).run(query)
    except Exception as exc:
        logger.exception("Error while handling query: %s", exc)
        return APOLOGY


def main() -> None:
    """Run the Streamlit chat UI."""
    st.title("Calculator Agent")

    if "messages" not in st.session_state:
        st.session_state["messages"] = []

    for message in st.session_state.messages:
        with st.chat_message(message["role"]):
            st.markdown(message["content"])  # type: ignore[arg-type]

    query = st.chat_input("Ask me to add, multiply or divide")  # type: ignore[assignment]
    if not query:
        return

    with st.chat_message("user"):
        st.markdown(query)
    st.session_state.messages.append({"role": "user", "content": query})

    response = ask(query)

    with st.chat_message("assistant"):
        st.markdown(response)
    st.session_state.messages.append({"role": "assistant", "content": response})


if __name__ == "__main__":
    main()
