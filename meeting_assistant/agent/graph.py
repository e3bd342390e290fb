from __future__ import annotations

from langgraph.graph import StateGraph, END

from meeting_assistant.agent.intent import is_cancellation
from meeting_assistant.agent.nodes import DialogueNodes, cancel_node, prompt_node
from meeting_assistant.agent.state import DialogueTurn
from meeting_assistant.utils.logger import get_logger

log = get_logger("agent.graph")


# ── routing functions ─────────────────────────────────

def _route_after_authorize(state: DialogueTurn) -> str:
    if state.get("outcome") == "unauthorized":
        return "end"
    if is_cancellation(state["message"]):
        return "cancel"
    session = state.get("session")
    if session is None:
        return "initial_parse"
    if session.step == "confirm":
        return "confirm"
    return "collect_field"


def _route_after_collect(state: DialogueTurn) -> str:
    # a re-prompt was already written
    return "end" if state.get("response") else "prompt"


# ── graph builder ─────────────────────────────────────

def build_dialogue_graph(nodes: DialogueNodes):
    """Build and compile the scheduling dialogue graph."""

    graph = StateGraph(DialogueTurn)

    # add nodes
    graph.add_node("authorize", nodes.authorize)
    graph.add_node("cancel", cancel_node)
    graph.add_node("initial_parse", nodes.initial_parse)
    graph.add_node("collect_field", nodes.collect_field)
    graph.add_node("prompt", prompt_node)
    graph.add_node("confirm", nodes.confirm)

    # entry
    graph.set_entry_point("authorize")

    # edges
    graph.add_conditional_edges("authorize", _route_after_authorize, {
        "end": END,
        "cancel": "cancel",
        "initial_parse": "initial_parse",
        "collect_field": "collect_field",
        "confirm": "confirm",
    })

    graph.add_edge("initial_parse", "prompt")

    graph.add_conditional_edges("collect_field", _route_after_collect, {
        "prompt": "prompt",
        "end": END,
    })

    graph.add_edge("prompt", END)
    graph.add_edge("cancel", END)
    graph.add_edge("confirm", END)

    compiled = graph.compile()
    log.info("Dialogue graph compiled successfully")
    return compiled
