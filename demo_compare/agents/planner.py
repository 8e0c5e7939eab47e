from typing import Any, Dict, List

from langchain_core.messages import HumanMessage, SystemMessage

from ..ai.actions import normalize_plan
from ..ai.llm import parse_json_reply, preview
from ..core.types import AgentState
from ..dom.elements import format_candidates
from ..utils.imaging import image_to_data_url

PLANNER_SYSTEM_PROMPT = (
    "You are an autonomous browser agent. You see a screenshot of the current page,\n"
    "its visible text, and a list of interactive DOM candidates with stable ids.\n"
    "You work towards the user's goal one step at a time.\n"
    "\n"
    "Standing instructions from the operator:\n"
    "{instructions}\n"
    "\n"
    "Each turn, return a single JSON object:\n"
    "{{\n"
    "  \"actions\": [{{\"action\": \"click\" | \"fill\" | \"select\" | \"press\", \"target_id\": \"<id>\", \"params\": {{...}}}}],\n"
    "  \"done\": true | false,\n"
    "  \"message\": \"What you did or, when done, the answer to the goal\"\n"
    "}}\n"
    "\n"
    "Rules:\n"
    "- Use ONLY candidate ids from the list. Keep actions to what this step needs.\n"
    "- When the goal asks for information that is already on the page, return no actions,\n"
    "  set \"done\": true and put the full answer in \"message\".\n"
    "- If the previous step did not change the page, try a different control.\n"
    "- Never perform destructive actions."
)


def plan_step(state: AgentState) -> AgentState:
    """Ask the model for the next step towards the goal."""
    step = state.get("step", 0)
    elements: List[Dict[str, Any]] = state.get("elements") or []
    history_tail = (state.get("history") or [])[-3:]

    system_msg = SystemMessage(
        content=PLANNER_SYSTEM_PROMPT.format(instructions=state.get("instructions") or "(none)"))
    human_content: List[Dict[str, Any]] = [
        {
            "type": "text",
            "text": (
                f"Goal: {state['goal']}\n"
                f"Current URL: {state.get('url')}\n"
                f"History (last {len(history_tail)}): {history_tail}\n\n"
                f"Visible page text:\n{state.get('page_text') or ''}\n\n"
                "Candidates (id, role, name, landmark):\n"
                f"{format_candidates(elements)}"
            ),
        }
    ]
    if state.get("screenshot_png"):
        data_url = image_to_data_url(state["screenshot_png"], max_size=720)
        human_content.append({"type": "image_url", "image_url": {"url": data_url}})

    print(f"[Planner] Step={step} calling model with {len(elements)} candidates...")
    try:
        result = state["llm"].invoke([system_msg, HumanMessage(content=human_content)])
    except Exception as e:
        print(f"[Planner] Model call failed: {e}")
        raise

    plan = normalize_plan(parse_json_reply(result.content, source="Planner"))
    state["actions"] = plan["actions"]
    state["message"] = plan["message"] or state.get("message") or ""
    state["done"] = plan["done"]
    if plan["done"]:
        state["completion_via"] = "planner"
    print(
        f"[Planner] done={plan['done']} actions={len(plan['actions'])} message='{preview(plan['message'])}'")
    return state
