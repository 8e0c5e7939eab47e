from typing import Any, Dict, List

FILLABLE_ROLES = {"textbox", "textarea", "searchbox", "combobox"}
SELECTABLE_ROLES = {"combobox"}
SUPPORTED_ACTIONS = {"click", "fill", "select", "press", "check", "upload"}


def normalize_plan(plan: Any) -> Dict[str, Any]:
    """Coerce whatever the model returned into {"actions": [...], "done": bool, "message": str}.

    - A list wrapping the object is unwrapped; a bare list is treated as the actions.
    - A single action object is wrapped in actions[].
    - Every action gets a params dict.
    """
    if isinstance(plan, list):
        if len(plan) == 1 and isinstance(plan[0], dict) and "actions" in plan[0]:
            plan = plan[0]
        else:
            plan = {"actions": plan}

    if not isinstance(plan, dict):
        plan = {"actions": []}
    elif "actions" not in plan and "action" in plan:
        plan = {"actions": [plan], "done": plan.get("done", False)}

    actions = plan.get("actions") or []
    if isinstance(actions, dict):
        actions = [actions]
    elif not isinstance(actions, list):
        actions = []

    for a in actions:
        if isinstance(a, dict) and not isinstance(a.get("params"), dict):
            a["params"] = {}

    return {
        "actions": [a for a in actions if isinstance(a, dict)],
        "done": bool(plan.get("done", False)),
        "message": str(plan.get("message") or plan.get("followup_hint") or ""),
    }


def normalize_actions(actions: List[Dict[str, Any]], candidates: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop actions that reference unknown ids or do not fit the target's role."""
    role_by_id = {str(e.get("id")): (e.get("role") or "") for e in candidates}
    normalized: List[Dict[str, Any]] = []
    seen_targets = set()

    for a in actions:
        action_type = a.get("action")
        tid_raw = a.get("target_id")
        if tid_raw is None:
            continue
        tid = str(tid_raw)
        if tid not in role_by_id:
            print(f"[Actions] Skipping action on unknown target_id {tid}")
            continue

        params = a.get("params") or {}
        role = role_by_id[tid]

        if action_type == "fill":
            if not (params.get("text") or params.get("value")):
                print("[Actions] Skipping fill without text")
                continue
            if role not in FILLABLE_ROLES:
                print(f"[Actions] Skipping fill on non-input role {role} for {tid}")
                continue
            # one field -> one control per round
            if tid in seen_targets:
                continue
        elif action_type == "select":
            if not (params.get("option") or params.get("value")):
                print("[Actions] Skipping select without option")
                continue
            if role not in SELECTABLE_ROLES:
                print(f"[Actions] Skipping select on non-select role {role} for {tid}")
                continue
        elif action_type == "press":
            if not params.get("key"):
                print("[Actions] Skipping press without key")
                continue
        elif action_type == "upload":
            if not params.get("file"):
                print("[Actions] Skipping upload without file")
                continue
            if role != "file":
                print(f"[Actions] Skipping upload on non-file role {role} for {tid}")
                continue
        elif action_type not in SUPPORTED_ACTIONS:
            print(f"[Actions] Skipping unsupported action type {action_type}")
            continue

        seen_targets.add(tid)
        normalized.append({"action": action_type, "target_id": tid, "params": params})

    return normalized
