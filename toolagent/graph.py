"""
Toy cooking workflow built with LangGraph.

cut_the_vegetables -> boil_the_rice -> add_the_salt -> taste_the_biryani,
then a coin flip decides between another round of salt and the end.
"""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from langgraph.graph import END, START, MessagesState, StateGraph

from toolagent.config import GRAPH_IMAGE_PATH, GRAPH_RECURSION_LIMIT, configure_logging

logger = logging.getLogger(__name__)

CUT_THE_VEGETABLES = "cut_the_vegetables"
BOIL_THE_RICE = "boil_the_rice"
ADD_THE_SALT = "add_the_salt"
TASTE_THE_BIRYANI = "taste_the_biryani"

Decide = Callable[[MessagesState], str]


def cut_the_vegetables(state: MessagesState) -> MessagesState:
    logger.info("Cutting the vegetables....")
    return state


def boil_the_rice(state: MessagesState) -> MessagesState:
    logger.info("Boiling the Rice...")
    return state


def add_the_salt(state: MessagesState) -> MessagesState:
    logger.info("Adding the salt...")
    return state


def taste_the_biryani(state: MessagesState) -> MessagesState:
    logger.info("Tasting the Biryani...")
    logger.info("state:- %s", state)
    return state


def coin_flip(rng: Optional[random.Random] = None) -> Decide:
    """Return a branch function that loops back to the salt step half the time."""
    draw = rng.random if rng is not None else random.random

    def where_to_go(state: MessagesState) -> str:
        return ADD_THE_SALT if draw() > 0.5 else END

    return where_to_go


def build_biryani_graph(decide: Optional[Decide] = None):
    """
    Compile the workflow.

    Parameters
    ----------
    decide : callable, optional
        Chooses the edge after tasting: ``ADD_THE_SALT`` or ``END``.
        Defaults to an unseeded coin flip.
    """
    graph = StateGraph(MessagesState)
    graph.add_node(CUT_THE_VEGETABLES, cut_the_vegetables)
    graph.add_node(BOIL_THE_RICE, boil_the_rice)
    graph.add_node(ADD_THE_SALT, add_the_salt)
    graph.add_node(TASTE_THE_BIRYANI, taste_the_biryani)

    graph.add_edge(START, CUT_THE_VEGETABLES)
    graph.add_edge(CUT_THE_VEGETABLES, BOIL_THE_RICE)
    graph.add_edge(BOIL_THE_RICE, ADD_THE_SALT)
    graph.add_edge(ADD_THE_SALT, TASTE_THE_BIRYANI)
    graph.add_conditional_edges(
        TASTE_THE_BIRYANI,
        decide or coin_flip(),
        {END: END, ADD_THE_SALT: ADD_THE_SALT},
    )
    return graph.compile()


def export_graph_image(app: Any, path: Path = GRAPH_IMAGE_PATH) -> Path:
    """Render the compiled graph as a Mermaid PNG and write it to ``path``."""
    png = app.get_graph().draw_mermaid_png()
    path = Path(path)
    path.write_bytes(png)
    logger.info("Graph image written to %s", path)
    return path


def run_biryani(app: Any, recursion_limit: int = GRAPH_RECURSION_LIMIT) -> Dict[str, Any]:
    """Run the workflow from an empty conversation."""
    return app.invoke({"messages": []}, config={"recursion_limit": recursion_limit})


def main() -> None:
    configure_logging()
    app = build_biryani_graph()
    export_graph_image(app)
    result = run_biryani(app)
    logger.info("Final: %s", result)


if __name__ == "__main__":
    main()
