import re
from typing import Any, Dict, List, Set

# --- Configuration & Constants ---

BASE_ROLE_WEIGHTS = {
    "button": 1.0,
    "link": 1.0,
    "textbox": 1.0,
    "combobox": 1.0,
    "file": 1.0,
    "checkbox": 0.8,
    "radio": 0.8,
    "menuitem": 0.8,
    "tab": 0.8,
    "generic": 0.6,
}

INTENT_KEYWORDS = {
    "upload": {"upload", "file", "attach"},
    "form_fill": {"fill", "enter", "type", "form", "field", "add a new row"},
    "select": {"check", "select", "tick", "radio", "checkbox"},
    "navigate": {"go to", "open", "section", "card", "navigate"},
}

INTENT_ROLES = {
    "upload": {"file"},
    "form_fill": {"textbox", "combobox"},
    "select": {"checkbox", "radio", "generic"},
    "navigate": {"link", "generic", "tab"},
}

# Site chrome that is never the target of a scenario
GENERIC_TOKENS = {"toolsqa", "selenium", "training", "banner", "advertisement"}

DESTRUCTIVE_TOKENS = {"delete", "remove", "close", "dismiss", "trash"}


def tokenize(text: str) -> List[str]:
    return [t for t in re.findall(r"[a-zA-Z0-9]+", text.lower()) if t]


def classify_intent(instruction: str) -> str:
    """Classify instruction into a high-level intent."""
    instr_lower = instruction.lower()
    for intent, keywords in INTENT_KEYWORDS.items():
        for kw in keywords:
            if kw in instr_lower:
                return intent
    return "generic"


def _score_lexical_match(instruction: str, name: str, instr_set: Set[str], name_set: Set[str]) -> float:
    score = 0.0
    if name and name.lower() in instruction.lower():
        score += 5.0 if len(name) > 3 else 2.0
    score += 3.0 * len(instr_set & name_set)
    return score


def score_element(elem: Dict[str, Any], instruction: str) -> float:
    """
    Score an element for an instruction:
    1. Lexical match of name/placeholder against the instruction
    2. Role bias for the instruction's intent
    3. Penalties for site chrome and destructive controls
    """
    name = (elem.get("name") or "").strip()
    placeholder = (elem.get("placeholder") or "").strip()
    role = elem.get("role") or ""
    full_name = (name + " " + placeholder).strip()

    instr_set = set(tokenize(instruction))
    name_set = set(tokenize(full_name))
    intent = classify_intent(instruction)

    score = _score_lexical_match(instruction, full_name, instr_set, name_set)
    score += BASE_ROLE_WEIGHTS.get(role, 0.5)
    if role in INTENT_ROLES.get(intent, set()):
        score += 2.0

    if name_set & GENERIC_TOKENS:
        score -= 1.0
    if name_set & DESTRUCTIVE_TOKENS and not instr_set & DESTRUCTIVE_TOKENS:
        score -= 3.0
    if len(name) > 120:
        # containers whose text is a whole section are poor targets
        score -= 2.0
    return score


def select_top(elements: List[Dict[str, Any]], instruction: str, top_k: int) -> List[Dict[str, Any]]:
    """Score every element and keep the best `top_k`, inputs always included for fill intents."""
    scored = []
    for e in elements:
        e_copy = dict(e)
        e_copy["score"] = score_element(e, instruction)
        scored.append(e_copy)
    scored.sort(key=lambda x: x["score"], reverse=True)

    selected = scored[:top_k]
    if classify_intent(instruction) == "form_fill":
        used = {e["id"] for e in selected}
        for e in scored[top_k:]:
            if e.get("role") in ("textbox", "combobox") and e["id"] not in used:
                selected.append(e)
    return selected
