from typing import Any, Dict, List

from .accessibility import accessible_name, nearest_landmark
from ..core.config import CLICKABLE_ROLES, EXTRA_SELECTORS

INPUT_ROLES = ("textbox", "textarea", "searchbox", "combobox")


def resolve_locator(page, hint: Dict[str, Any]):
    """Turn a stored locator hint back into a Playwright locator."""
    kind = hint.get("kind")
    if kind == "role":
        locator = None
        if hint.get("name"):
            locator = page.get_by_role(hint["role"], name=hint["name"], exact=True)
            # nth was recorded against the unnamed role sweep
            if locator.count() != 1:
                locator = None
        if locator is None:
            locator = page.get_by_role(hint["role"]).nth(hint.get("nth", 0))
    elif kind == "css":
        locator = page.locator(hint["selector"]).nth(hint.get("nth", 0))
    else:
        raise RuntimeError(f"Unknown locator hint: {hint}")

    return locator


def _describe(el, role: str, locator_hint: Dict[str, Any]) -> Dict[str, Any]:
    box = el.bounding_box()
    if not box or box["width"] * box["height"] < 50:
        return {}

    name = accessible_name(el)
    placeholder = el.get_attribute("placeholder") or ""
    value = ""
    if role in INPUT_ROLES:
        try:
            value = el.input_value()
        except Exception:
            pass

    return {
        "role": role,
        "name": name,
        "landmark": nearest_landmark(el),
        "placeholder": placeholder,
        "value": value,
        "bounding_box": box,
        "locator": locator_hint,
        "name_hint": (name[:30] + "...") if len(name) > 30 else name,
    }


def collect_candidates(page) -> List[Dict[str, Any]]:
    """Return visible interactive elements with bounding boxes and a locator hint."""
    elements: List[Dict[str, Any]] = []

    for role in CLICKABLE_ROLES:
        loc = page.get_by_role(role)
        for i in range(loc.count()):
            el = loc.nth(i)
            try:
                if not el.is_visible():
                    continue
                name = accessible_name(el)
                hint = {"kind": "role", "role": role, "name": name, "nth": i}
                desc = _describe(el, role, hint)
            except Exception:
                continue
            if desc:
                elements.append(desc)

    for selector in EXTRA_SELECTORS:
        loc = page.locator(selector)
        role = "file" if "file" in selector else "generic"
        for i in range(loc.count()):
            el = loc.nth(i)
            try:
                if not el.is_visible():
                    continue
                desc = _describe(el, role, {"kind": "css", "selector": selector, "nth": i})
            except Exception:
                continue
            if desc:
                elements.append(desc)

    # De-duplication: group by spatial location (rounded to 2px)
    spatial_map: Dict[str, List[Dict[str, Any]]] = {}
    for e in elements:
        box = e["bounding_box"]
        key = f"{round(box['x'] / 2)}_{round(box['y'] / 2)}_{round(box['width'] / 2)}_{round(box['height'] / 2)}"
        spatial_map.setdefault(key, []).append(e)

    def sort_key(x):
        has_role = x["role"] not in ("generic",)
        has_name = bool(x["name"])
        return (has_role, has_name, len(x["name"] or ""))

    unique_elements = []
    for group in spatial_map.values():
        group.sort(key=sort_key, reverse=True)
        unique_elements.append(group[0])

    # Re-index ids to be continuous after filtering
    for i, e in enumerate(unique_elements):
        e["id"] = str(i)

    return unique_elements


def visible_text(page, limit: int) -> str:
    """Visible body text with blank lines dropped, cut to `limit` characters."""
    try:
        text = page.inner_text("body", timeout=5000)
    except Exception as e:
        print(f"[Elements] Could not read page text: {e}")
        return ""
    text = "\n".join(line.strip() for line in text.splitlines() if line.strip())
    return text[:limit]


def format_candidates(candidates: List[Dict[str, Any]]) -> str:
    lines = []
    for c in candidates:
        line = f"- id={c.get('id')} | role={c.get('role')} | name={c.get('name')} | landmark={c.get('landmark')}"
        if c.get("placeholder"):
            line += f" | placeholder={c.get('placeholder')}"
        if c.get("value"):
            line += f" | value={c.get('value')}"
        lines.append(line)
    return "\n".join(lines)
