import pytest

from demo_compare.ai.executor import execute_actions
from demo_compare.dom.elements import format_candidates, resolve_locator


class FakeLocator:
    def __init__(self, page, key, matches=1, fail_click=False):
        self.page = page
        self.key = key
        self.matches = matches
        self.fail_click = fail_click

    def count(self):
        return self.matches

    def nth(self, i):
        return FakeLocator(self.page, f"{self.key}[{i}]", matches=1, fail_click=self.fail_click)

    def wait_for(self, state=None, timeout=None):
        pass

    def click(self, timeout=None, force=False):
        if self.fail_click and not force:
            raise RuntimeError("element is covered by an ad")
        self.page.log.append(("click", self.key, force))

    def scroll_into_view_if_needed(self, timeout=None):
        pass

    def fill(self, text, timeout=None):
        self.page.log.append(("fill", self.key, text))

    def press(self, key, timeout=None):
        self.page.log.append(("press", self.key, key))

    def set_input_files(self, path, timeout=None):
        self.page.log.append(("upload", self.key, path))


class FakeLocatorPage:
    def __init__(self, role_counts=None, covered=()):
        self.log = []
        self.role_counts = role_counts or {}
        self.covered = set(covered)

    def get_by_role(self, role, name=None, exact=False):
        key = f"role={role}" + (f"[name={name}]" if name else "")
        return FakeLocator(self, key, matches=self.role_counts.get(key, 1))

    def locator(self, selector):
        return FakeLocator(self, selector, fail_click=selector in self.covered)

    def wait_for_timeout(self, ms):
        pass


CANDIDATES = [
    {"id": "0", "role": "button", "name": "Submit", "locator": {"kind": "role", "role": "button", "name": "Submit", "nth": 0}},
    {"id": "1", "role": "textbox", "name": "Full Name", "locator": {"kind": "css", "selector": "#userName", "nth": 0}},
    {"id": "2", "role": "file", "name": "Select a file", "locator": {"kind": "css", "selector": "input[type=file]", "nth": 0}},
    {"id": "3", "role": "generic", "name": "Elements", "locator": {"kind": "css", "selector": "div.card", "nth": 0}},
]


def test_role_hint_falls_back_to_position():
    page = FakeLocatorPage(role_counts={"role=button[name=Gone]": 0})
    loc = resolve_locator(page, {"kind": "role", "role": "button", "name": "Gone", "nth": 2})
    assert loc.key == "role=button[2]"


def test_same_named_buttons_keep_the_chosen_index():
    # the alerts page has several "Click me" buttons
    page = FakeLocatorPage(role_counts={"role=button[name=Click me]": 3})
    candidates = [{"id": "7", "role": "button", "name": "Click me",
                   "locator": {"kind": "role", "role": "button", "name": "Click me", "nth": 2}}]

    executed = execute_actions(page, [{"action": "click", "target_id": "7", "params": {}}], candidates)

    assert len(executed) == 1
    assert page.log == [("click", "role=button[2]", False)]


def test_unknown_hint_kind():
    with pytest.raises(RuntimeError):
        resolve_locator(FakeLocatorPage(), {"kind": "xpath", "selector": "//div"})


def test_execute_click_fill_upload():
    page = FakeLocatorPage()
    actions = [
        {"action": "fill", "target_id": "1", "params": {"text": "John Smith"}},
        {"action": "upload", "target_id": "2", "params": {"file": "sample.txt"}},
        {"action": "click", "target_id": "0", "params": {}},
    ]
    executed = execute_actions(page, actions, CANDIDATES)

    assert executed == actions
    assert ("fill", "#userName[0]", "John Smith") in page.log
    upload = next(entry for entry in page.log if entry[0] == "upload")
    assert upload[2].endswith("sample.txt")
    assert ("click", "role=button[name=Submit]", False) in page.log


def test_covered_target_is_force_clicked():
    page = FakeLocatorPage(covered={"div.card"})
    executed = execute_actions(page, [{"action": "click", "target_id": "3", "params": {}}], CANDIDATES)
    assert len(executed) == 1
    assert ("click", "div.card[0]", True) in page.log


def test_failed_action_is_skipped():
    page = FakeLocatorPage()
    actions = [
        {"action": "upload", "target_id": "2", "params": {"file": "missing.pdf"}},
        {"action": "press", "target_id": "1", "params": {"key": "Enter"}},
    ]
    executed = execute_actions(page, actions, CANDIDATES)
    assert executed == actions[1:]
    assert not any(entry[0] == "upload" for entry in page.log)


def test_candidate_listing_for_prompts():
    text = format_candidates([dict(CANDIDATES[1], value="John", landmark="form")])
    assert text == "- id=1 | role=textbox | name=Full Name | landmark=form | value=John"
