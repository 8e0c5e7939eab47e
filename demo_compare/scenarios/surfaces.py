from typing import Any, List, Optional

from .probes import read_probe
from ..core.config import SAMPLE_FILE_PATH
from ..core.types import Scenario


class AutomationSurface:
    """One way of driving the page: `perform` a scenario's action, `read` its result."""

    label = "surface"

    def perform(self, session, scenario: Scenario) -> None:
        raise NotImplementedError

    def observe(self, session, scenario: Scenario) -> Optional[List[Any]]:
        return None

    def read(self, session, scenario: Scenario) -> Any:
        raise NotImplementedError


class PlaywrightSurface(AutomationSurface):
    """Exact selectors and literal values."""

    label = "direct"

    def perform(self, session, scenario: Scenario) -> None:
        page = session.page
        for step in scenario.get("steps") or []:
            action = step["action"]
            selector = step["selector"]
            if action == "fill":
                page.fill(selector, step["value"])
            elif action == "click":
                page.click(selector)
            elif action == "click_last":
                matches = page.query_selector_all(selector)
                if not matches:
                    raise RuntimeError(f"No element matches '{selector}'")
                matches[-1].click()
            elif action == "upload":
                page.set_input_files(selector, str(SAMPLE_FILE_PATH))
            else:
                raise ValueError(f"Unknown step action: {action}")

    def read(self, session, scenario: Scenario) -> Any:
        return read_probe(session, scenario)


class NaturalLanguageSurface(AutomationSurface):
    """Instructions resolved by a chat model through the session's natural-language page."""

    label = "extracted"

    def __init__(self, extract_key: str = "extract", with_observe: bool = True):
        self.extract_key = extract_key
        self.with_observe = with_observe

    def perform(self, session, scenario: Scenario) -> None:
        instruction = scenario.get("instruction")
        if instruction:
            session.nl.act(instruction)

    def observe(self, session, scenario: Scenario) -> Optional[List[Any]]:
        prompt = scenario.get("observe")
        if not prompt or not self.with_observe:
            return None
        return session.nl.observe(prompt)

    def read(self, session, scenario: Scenario) -> Any:
        prompt = scenario.get(self.extract_key)
        if not prompt:
            # nothing for the model to read (dismissed dialog, visibility check)
            return read_probe(session, scenario)
        return session.nl.extract(prompt)
