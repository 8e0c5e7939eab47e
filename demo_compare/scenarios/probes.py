from typing import Any, List, Optional

from ..core.config import DIALOG_WAIT_MS
from ..core.types import Scenario


def read_probe(session, scenario: Scenario) -> Any:
    """Deterministic read of a scenario's result from the shared page."""
    page = session.page
    probe = scenario["probe"]
    kind = probe["kind"]
    selector = probe.get("selector")

    if kind == "text":
        return page.text_content(selector)
    if kind == "rows":
        rows = page.eval_on_selector_all(selector, "(rows) => rows.map((row) => row.textContent)")
        # DemoQA pads the table with blank rows
        return [r.strip() for r in rows if r and r.strip()]
    if kind == "texts":
        texts = page.eval_on_selector_all(selector, "(els) => els.map((el) => el.textContent)")
        return [t.strip() for t in texts if t and t.strip()]
    if kind == "input_value":
        return page.input_value(selector)
    if kind == "visible":
        return page.is_visible(selector)
    if kind == "dialog":
        page.wait_for_timeout(DIALOG_WAIT_MS)
        return session.dialogs[-1] if session.dialogs else None
    raise ValueError(f"Unknown probe kind: {kind}")


def _as_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "\n".join(_as_text(v) for v in value)
    if isinstance(value, dict):
        return "\n".join(_as_text(v) for v in value.values())
    return "" if value is None else str(value)


def missing_expectations(scenario: Scenario, value: Any) -> List[str]:
    text = _as_text(value).lower()
    return [exp for exp in scenario.get("expect_contains") or [] if exp.lower() not in text]


def verify_outcome(scenario: Scenario, value: Any, baseline: Optional[Any] = None) -> bool:
    """A result passes when it is truthy, holds every expected string and grew past the baseline."""
    if isinstance(value, str):
        value = value.strip()
    if not value:
        return False
    if missing_expectations(scenario, value):
        return False
    if scenario.get("compare_baseline") and isinstance(baseline, list) and isinstance(value, list):
        return len(value) > len(baseline)
    return True
