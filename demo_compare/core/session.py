from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from playwright.sync_api import sync_playwright

from .config import BASE_URL, HEADLESS, SLOW_MO, VIEWPORT


def goto_demoqa(page, path: str) -> None:
    """Navigate to a DemoQA path; an empty path is the home page."""
    page.goto(f"{BASE_URL}/{path}")


class Session:
    """Live browser handles shared by every scenario of one suite run."""

    def __init__(self, playwright: Any, browser: Any, page: Any, llm: Any = None, nl_page: Any = None):
        self.playwright = playwright
        self.browser = browser
        self.page = page
        self.llm = llm
        self.dialogs: List[str] = []
        self._nl_page = nl_page
        page.on("dialog", self._on_dialog)

    def _on_dialog(self, dialog) -> None:
        message = dialog.message
        print(f"[Session] Dialog ({dialog.type}): {message}")
        self.dialogs.append(message)
        dialog.dismiss()

    @property
    def nl(self):
        """Natural-language page bound to the shared page, created on first use."""
        if self._nl_page is None:
            from ..ai.nl_page import NaturalLanguagePage

            self._nl_page = NaturalLanguagePage(self.page, llm=self.llm)
        return self._nl_page

    def goto(self, path: str) -> None:
        goto_demoqa(self.page, path)

    def close(self) -> None:
        try:
            self.browser.close()
        finally:
            self.playwright.stop()


@contextmanager
def browser_session(headless: Optional[bool] = None, llm: Any = None) -> Iterator[Session]:
    """Launch Chromium with one page, yield the session, always close it."""
    headless = HEADLESS if headless is None else headless
    print(f"[Session] Launching Chromium (headless={headless})...")
    p = sync_playwright().start()
    try:
        browser = p.chromium.launch(headless=headless, slow_mo=SLOW_MO)
        page = browser.new_page()
        page.set_viewport_size(VIEWPORT)
    except Exception:
        p.stop()
        raise

    session = Session(p, browser, page, llm=llm)
    print("[Session] Browser session started")
    try:
        yield session
    finally:
        session.close()
        print("[Session] Browser session closed")
