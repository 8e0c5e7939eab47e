import json
import os
from io import BytesIO
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image

from demo_compare.core.config import BASE_URL
from demo_compare.core.session import Session, browser_session
from demo_compare.scenarios.catalog import SCENARIOS
from demo_compare.scenarios.surfaces import PlaywrightSurface

DEFAULT_ROWS = [
    "Cierra Vega 39 cierra@example.com 10000 Insurance",
    "Alden Cantrell 45 alden@example.com 12000 Compliance",
    "Kierra Gentry 29 kierra@example.com 2000 Legal",
]


class FakeDialog:
    type = "alert"

    def __init__(self, message):
        self.message = message
        self.dismissed = False

    def dismiss(self):
        self.dismissed = True


class FakeHandle:
    def __init__(self, on_click):
        self._on_click = on_click

    def click(self):
        self._on_click()


class FakeDemoQAPage:
    """Just enough of DemoQA behind the Playwright page calls the scenarios use."""

    def __init__(self):
        self.url = "about:blank"
        self.calls = []
        self.handlers = {}
        self.broken_selectors = set()
        self.dialogs = []
        self._reset()

    def _reset(self):
        self.fields = {}
        self.texts = {}
        self.input_values = {}
        self.visible = set()
        self.rows = list(DEFAULT_ROWS) + ["\u00a0"] * 7

    @property
    def path(self):
        return self.url[len(BASE_URL) + 1:] if self.url.startswith(BASE_URL) else ""

    def _check(self, selector):
        if selector in self.broken_selectors:
            raise RuntimeError(f"Timeout 30000ms exceeded waiting for '{selector}'")

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def goto(self, url):
        self.calls.append(("goto", url))
        self.url = url
        self._reset()

    def set_viewport_size(self, size):
        self.calls.append(("set_viewport_size", size))

    def wait_for_selector(self, selector, **kwargs):
        self.calls.append(("wait_for_selector", selector))
        self._check(selector)

    def wait_for_timeout(self, ms):
        self.calls.append(("wait_for_timeout", ms))

    def fill(self, selector, value):
        self._check(selector)
        self.calls.append(("fill", selector, value))
        self.fields[selector] = value

    def click(self, selector):
        self._check(selector)
        self.calls.append(("click", selector))
        path = self.path
        if path == "text-box" and selector == "#submit":
            f = self.fields
            self.texts["#output"] = (
                f"Name:{f.get('#userName', '')}Email:{f.get('#userEmail', '')}"
                f"Current Address :{f.get('#currentAddress', '')}Permananet Address :{f.get('#permanentAddress', '')}"
            )
        elif path == "checkbox" and selector == ".rct-checkbox":
            self.texts["#result"] = "You have selected :homedesktopnotescommands"
        elif path == "radio-button" and selector == "label[for='yesRadio']":
            self.texts[".text-success"] = "Yes"
        elif path == "webtables" and selector == "#submit":
            keys = ("#firstName", "#lastName", "#age", "#userEmail", "#salary", "#department")
            self.rows.insert(3, " ".join(self.fields.get(k, "") for k in keys))
        elif path == "alerts" and selector == "#alertButton":
            dialog = FakeDialog("You clicked a button")
            self.dialogs.append(dialog)
            for handler in self.handlers.get("dialog", []):
                handler(dialog)
        elif selector == 'div.card:has-text("Elements")':
            self.url = f"{BASE_URL}/elements"
        elif selector == 'span:has-text("Text Box")':
            self.url = f"{BASE_URL}/text-box"
            self.visible.add("#userName")

    def query_selector_all(self, selector):
        self._check(selector)
        if self.path != "buttons":
            return []

        def set_message(text):
            return lambda: self.texts.__setitem__("#dynamicClickMessage", text)

        return [
            FakeHandle(set_message("You have done a double click")),
            FakeHandle(set_message("You have done a right click")),
            FakeHandle(set_message("You have done a dynamic click")),
        ]

    def set_input_files(self, selector, files, **kwargs):
        self._check(selector)
        name = Path(files).name
        self.input_values[selector] = f"C:\\fakepath\\{name}"
        self.texts["#uploadedFilePath"] = f"C:\\fakepath\\{name}"

    def text_content(self, selector):
        self._check(selector)
        return self.texts.get(selector)

    def input_value(self, selector):
        self._check(selector)
        return self.input_values.get(selector, "")

    def is_visible(self, selector):
        return selector in self.visible

    def eval_on_selector_all(self, selector, expression):
        self._check(selector)
        if ".rt-tr-group" in selector:
            return list(self.rows)
        if selector == "button":
            return ["Click Me", "Submit", " "]
        return []

    def inner_text(self, selector, timeout=None):
        lines = [f"DemoQA {self.path or 'home'}"] + list(self.texts.values())
        if self.path == "webtables":
            lines += self.rows
        return "\n".join(lines)

    def screenshot(self, path=None, full_page=False):
        self.calls.append(("screenshot", path))
        buf = BytesIO()
        Image.new("RGB", (64, 48), color=(200, 200, 200)).save(buf, format="PNG")
        if path:
            Path(path).write_bytes(buf.getvalue())
        return buf.getvalue()


class FakeChatModel:
    """Replays canned replies; dicts are sent back as JSON text."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if not self.replies:
            raise AssertionError("Unexpected model call")
        reply = self.replies.pop(0)
        if callable(reply):
            reply = reply(messages)
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return SimpleNamespace(content=reply)


class FakeNaturalLanguagePage:
    """Stands in for the LLM-backed page: acts by replaying the scenario's selector steps."""

    def __init__(self, page):
        self.page = page
        self.acted = []
        self.observed = []
        self.extracted = []

    def act(self, instruction):
        self.acted.append(instruction)
        scenario = next(s for s in SCENARIOS if s.get("instruction") == instruction)
        PlaywrightSurface().perform(SimpleNamespace(page=self.page), scenario)
        return [{"action": "click", "target_id": "0", "params": {}}]

    def observe(self, instruction):
        self.observed.append(instruction)
        return [{"description": f"observed for: {instruction}", "target_id": None, "role": None, "name": None}]

    def extract(self, instruction):
        self.extracted.append(instruction)
        return self.page.inner_text("body")


class FakePlaywright:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeBrowser:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def fake_page():
    return FakeDemoQAPage()


@pytest.fixture
def fake_session(fake_page):
    return Session(FakePlaywright(), FakeBrowser(), fake_page, nl_page=FakeNaturalLanguagePage(fake_page))


@pytest.fixture
def out_dir(tmp_path, monkeypatch):
    monkeypatch.setattr("demo_compare.agents.agent.OUT_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def make_llm():
    return FakeChatModel


# --- Live DemoQA suites (demo_tests/) ---

def pytest_collection_modifyitems(config, items):
    if os.getenv("RUN_E2E") == "1":
        return
    skip = pytest.mark.skip(reason="set RUN_E2E=1 to run the live DemoQA suites")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="module")
def live_session():
    """One browser session per suite module, closed after its last test."""
    with browser_session() as session:
        yield session


@pytest.fixture(scope="module")
def ai_session(live_session):
    if not os.getenv("OPENAI_API_KEY"):
        pytest.skip("OPENAI_API_KEY is required for natural-language steps")
    return live_session
