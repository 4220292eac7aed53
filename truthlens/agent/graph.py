"""LangGraph feed graph.

Defines the state machine for the curated feed:
  collect → [analyze | END] → [normalize | END] → END

The two model calls are strictly sequential: the analyst's only input is
the collector's output. Either stage ending with nothing usable stops the
graph without making further calls.
"""

from langgraph.graph import END, StateGraph

from truthlens.agent import nodes
from truthlens.agent.state import FeedState
from truthlens.llm import GEMINI_MODEL, ModelInvoker


def after_collect(state: FeedState) -> str:
    """Conditional edge: analyze only when the collector found something."""
    if state.get("candidates"):
        return "analyze"
    return END


def after_analyze(state: FeedState) -> str:
    """Conditional edge: normalize only when the analyst returned a list."""
    if state.get("analyzed") is not None:
        return "normalize"
    return END


def build_feed_graph(invoker: ModelInvoker, model: str = GEMINI_MODEL):
    """Build the LangGraph feed state machine bound to one model invoker.

    Graph structure:
        collect → analyze → normalize → END
        (collect and analyze may route straight to END)
    """

    async def collect(state: FeedState) -> dict:
        return await nodes.collect(state, invoker, model)

    async def analyze(state: FeedState) -> dict:
        return await nodes.analyze(state, invoker, model)

    graph = StateGraph(FeedState)

    graph.add_node("collect", collect)
    graph.add_node("analyze", analyze)
    graph.add_node("normalize", nodes.normalize)

    graph.set_entry_point("collect")
    graph.add_conditional_edges("collect", after_collect, ["analyze", END])
    graph.add_conditional_edges("analyze", after_analyze, ["normalize", END])
    graph.add_edge("normalize", END)

    return graph.compile()
