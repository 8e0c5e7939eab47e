import re
from dataclasses import dataclass
from typing import Any, Optional
from uuid import uuid4

from .graph import build_graph
from ..ai.llm import build_chat_model
from ..core.config import AGENT_INSTRUCTIONS, AGENT_MAX_STEPS, AGENT_MODEL, AGENT_PROVIDER, OUT_DIR
from ..core.types import AgentResult, AgentState

SUPPORTED_PROVIDERS = ("openai",)

URL_PATTERN = re.compile(r"https?://[^\s'\"]+")


@dataclass
class AgentConfig:
    """Provider, model and standing instructions for an autonomous run."""

    provider: str = AGENT_PROVIDER
    model: str = AGENT_MODEL
    instructions: str = AGENT_INSTRUCTIONS
    api_key: Optional[str] = None
    max_steps: int = AGENT_MAX_STEPS

    def __post_init__(self):
        if self.provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported agent provider '{self.provider}'. Supported: {', '.join(SUPPORTED_PROVIDERS)}")
        if self.max_steps < 1:
            raise ValueError("max_steps must be at least 1")

    @classmethod
    def from_env(cls) -> "AgentConfig":
        return cls()

    def start_url(self) -> Optional[str]:
        match = URL_PATTERN.search(self.instructions or "")
        return match.group(0).rstrip(".,") if match else None


class Agent:
    """Plans and executes a multi-step goal on the session page, returns one summary result."""

    def __init__(self, session, config: AgentConfig, llm: Any = None):
        self.session = session
        self.config = config
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = build_chat_model(
                model=self.config.model, api_key=self.config.api_key, temperature=0.0)
        return self._llm

    def execute(self, goal: str) -> AgentResult:
        app = build_graph()
        run_dir = OUT_DIR / f"agent_{uuid4()}"
        print(f"[Agent] Starting run ({self.config.provider}/{self.config.model}) with goal: {goal}")

        state: AgentState = {
            "goal": goal,
            "instructions": self.config.instructions,
            "start_url": self.config.start_url(),
            "history": [],
            "elements": [],
            "actions": [],
            "executed": [],
            "message": "",
            "step": 0,
            "max_steps": self.config.max_steps,
            "done": False,
            "success": False,
            "completion_via": None,
            "page": self.session.page,
            "llm": self.llm,
            "run_dir": str(run_dir),
        }

        # four nodes per step plus headroom
        final_state = app.invoke(
            state, config={"run_name": "demo_agent", "recursion_limit": self.config.max_steps * 4 + 5})
        print("[Agent] Run completed")

        return {
            "success": bool(final_state.get("success")),
            "completed": bool(final_state.get("done")),
            "message": final_state.get("message") or "",
            "actions": final_state.get("executed") or [],
            "steps": final_state.get("step", 0),
        }
