import time
from pathlib import Path
from typing import Any, Dict, List

from ..core.config import ASSETS_DIR
from ..dom.elements import resolve_locator


def _resolve_element(candidates: List[Dict[str, Any]], target_id: str) -> Dict[str, Any]:
    for e in candidates:
        if str(e.get("id")) == str(target_id):
            return e
    raise RuntimeError(f"Element with id {target_id} not found in candidates.")


def _resolve_asset(name: str) -> Path:
    path = ASSETS_DIR / Path(name).name
    if not path.exists():
        raise RuntimeError(f"No local asset named '{name}' in {ASSETS_DIR}")
    return path


def _safe_click(locator):
    locator.wait_for(state="visible", timeout=5000)
    try:
        locator.click(timeout=5000)
    except Exception:
        # DemoQA ads sometimes cover the target
        locator.scroll_into_view_if_needed(timeout=2000)
        locator.click(timeout=5000, force=True)


def _safe_fill(locator, text: str):
    locator.wait_for(state="visible", timeout=5000)
    locator.click(timeout=5000)
    locator.fill(text, timeout=5000)


def _safe_select(page, locator, option: str):
    locator.wait_for(state="visible", timeout=5000)
    try:
        locator.select_option(label=option, timeout=2000)
        return
    except Exception:
        pass
    locator.click(timeout=5000)
    page.get_by_text(option, exact=True).first.click(timeout=5000)


def execute_actions(page, actions: List[Dict[str, Any]], candidates: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Run normalized actions against the page; returns the ones that succeeded."""
    executed: List[Dict[str, Any]] = []
    for idx, plan in enumerate(actions, start=1):
        action = plan["action"]
        params = plan.get("params") or {}
        elem = _resolve_element(candidates, plan["target_id"])
        print(
            f"[Executor] Action {idx}/{len(actions)}: {action} on id={elem.get('id')} name={elem.get('name_hint') or elem.get('name')}")

        locator = resolve_locator(page, elem["locator"])
        start = time.time()
        try:
            if action in ("click", "check"):
                _safe_click(locator)
            elif action == "fill":
                _safe_fill(locator, params.get("text") or params.get("value"))
            elif action == "select":
                _safe_select(page, locator, params.get("option") or params.get("value"))
            elif action == "press":
                locator.press(params["key"], timeout=5000)
            elif action == "upload":
                locator.set_input_files(str(_resolve_asset(params["file"])), timeout=5000)
            else:
                raise RuntimeError(f"Unknown action type: {action}")
            page.wait_for_timeout(300)
        except Exception as e:
            print(f"[Executor] Action failed (skipping) in {time.time() - start:.2f}s: {e}")
            continue

        print(f"[Executor] Action succeeded in {time.time() - start:.2f}s")
        executed.append(plan)
    return executed
