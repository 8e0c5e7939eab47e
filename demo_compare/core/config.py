import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Core destinations
BASE_URL = os.getenv("DEMOQA_BASE_URL", "https://demoqa.com").rstrip("/")

# Browser
HEADLESS = _env_flag("HEADLESS", False)
SLOW_MO = int(os.getenv("SLOW_MO", "0"))
VIEWPORT = {"width": 1920, "height": 1080}
DIALOG_WAIT_MS = 1000

# Local assets
ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
SAMPLE_FILE_PATH = ASSETS_DIR / "sample.txt"

# Output paths
OUT_DIR = Path(os.getenv("DEMO_OUT_DIR", "artifacts/demo_runs/"))

# Models
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
AGENT_PROVIDER = os.getenv("AGENT_PROVIDER", "openai")
AGENT_MODEL = os.getenv("AGENT_MODEL", "gpt-4o")
AGENT_MAX_STEPS = int(os.getenv("AGENT_MAX_STEPS", "8"))
AGENT_INSTRUCTIONS = (
    f"Go to {BASE_URL}/elements. List all visible buttons on the page and print their text."
)
AGENT_GOAL = "List all visible buttons and print their text"

# Natural-language page
ACT_MAX_ROUNDS = int(os.getenv("ACT_MAX_ROUNDS", "4"))
MAX_PAGE_TEXT = 6000
TOP_K = 25

# Element collection
CLICKABLE_ROLES = [
    "button",
    "link",
    "checkbox",
    "radio",
    "textbox",
    "combobox",
    "menuitem",
    "tab",
]

# DemoQA renders several controls without an ARIA role (tree checkboxes,
# custom radios, cards, sidebar items), so sweep these as well.
EXTRA_SELECTORS = [
    "label",
    "input[type=file]",
    "div.card",
    "li[id^='item-']",
]


def require_api_key() -> str:
    """Return the OpenAI key or fail; every LLM-backed call needs it."""
    key = os.getenv("OPENAI_API_KEY")
    if not key:
        raise RuntimeError(
            "OPENAI_API_KEY is not set; natural-language and agent steps need it.")
    return key
