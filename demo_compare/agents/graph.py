from pathlib import Path

from langgraph.graph import END, StateGraph

from .planner import plan_step
from ..ai.actions import normalize_actions
from ..ai.executor import execute_actions
from ..core.config import MAX_PAGE_TEXT, TOP_K
from ..core.types import AgentState
from ..dom.elements import collect_candidates, visible_text
from ..dom.scoring import select_top


def capture_ui(state: AgentState) -> AgentState:
    """Screenshot + candidates + visible text of the current page."""
    page = state["page"]
    step = state.get("step", 0)

    if step == 0 and state.get("start_url"):
        print(f"[Agent] Opening {state['start_url']}")
        page.goto(state["start_url"])

    run_dir = Path(state["run_dir"])
    run_dir.mkdir(parents=True, exist_ok=True)
    screenshot = run_dir / f"step_{step}.png"
    png = page.screenshot(path=str(screenshot))

    elements = collect_candidates(page)
    state["elements"] = select_top(elements, state["goal"], TOP_K)
    state["page_text"] = visible_text(page, MAX_PAGE_TEXT)
    state["url"] = page.url
    state["screenshot_path"] = str(screenshot)
    state["screenshot_png"] = png
    print(f"[Agent] Step={step} url={page.url} candidates={len(state['elements'])}")
    return state


def execute_step(state: AgentState) -> AgentState:
    actions = normalize_actions(state.get("actions") or [], state.get("elements") or [])
    if not actions:
        print("[Agent] No actions to execute (no-op).")
        state["actions"] = []
        return state
    executed = execute_actions(state["page"], actions, state["elements"])
    state["actions"] = actions
    state.setdefault("executed", []).extend(executed)
    return state


def finalize_step(state: AgentState) -> AgentState:
    """Advance the step counter, record history, stop at the goal or the step cap."""
    step = state.get("step", 0) + 1
    state["step"] = step

    summary = ", ".join(f"{a.get('action')} {a.get('target_id')}" for a in state.get("actions") or [])
    history = state.get("history") or []
    history.append(f"Step {step}: Actions=[{summary}] Message='{state.get('message') or ''}'")
    state["history"] = history[-5:]

    if state.get("done"):
        state["success"] = True
        print(f"[Agent] Goal completed at step {step} (via {state.get('completion_via')}).")
    elif step >= state["max_steps"]:
        state["done"] = True
        state["success"] = False
        state["completion_via"] = "max_steps"
        print(f"[Agent] Max steps ({state['max_steps']}) reached.")
    return state


def should_continue(state: AgentState) -> str:
    if state.get("done"):
        return END
    return "capture_ui"


def build_graph():
    graph = StateGraph(AgentState)
    graph.add_node("capture_ui", capture_ui)
    graph.add_node("plan_step", plan_step)
    graph.add_node("execute_step", execute_step)
    graph.add_node("finalize_step", finalize_step)

    graph.set_entry_point("capture_ui")
    graph.add_edge("capture_ui", "plan_step")
    graph.add_edge("plan_step", "execute_step")
    graph.add_edge("execute_step", "finalize_step")
    graph.add_conditional_edges(
        "finalize_step",
        should_continue,
        {END: END, "capture_ui": "capture_ui"},
    )
    return graph.compile()
