import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .config import OUT_DIR


class RunReport:
    """Collects scenario outcomes for one runner invocation and writes them to a run directory."""

    def __init__(self, strategy: str, out_dir: Optional[Path] = None):
        self.strategy = strategy
        self.run_id = str(uuid4())
        self.run_dir = Path(out_dir or OUT_DIR) / f"run_{self.run_id}"
        self.started = time.strftime("%Y-%m-%dT%H:%M:%S")
        self.outcomes: List[Dict[str, Any]] = []
        self.agent: Optional[Dict[str, Any]] = None

    def record(self, session, outcome: Dict[str, Any]) -> None:
        """Store an outcome and a screenshot of the page it left behind."""
        self.run_dir.mkdir(parents=True, exist_ok=True)
        shot = self.run_dir / f"{len(self.outcomes) + 1:02d}_{outcome['scenario']}.png"
        try:
            session.page.screenshot(path=str(shot), full_page=True)
            outcome["screenshot"] = str(shot)
        except Exception as e:
            print(f"[Report] Failed to capture screenshot: {e}")
        self.outcomes.append(outcome)

    def summary(self) -> Dict[str, Any]:
        passed = sum(1 for o in self.outcomes if o.get("passed"))
        return {
            "run_id": self.run_id,
            "strategy": self.strategy,
            "started": self.started,
            "passed": passed,
            "failed": len(self.outcomes) - passed,
            "outcomes": self.outcomes,
            "agent": self.agent,
        }

    def write(self) -> Path:
        self.run_dir.mkdir(parents=True, exist_ok=True)
        path = self.run_dir / "report.json"
        path.write_text(json.dumps(self.summary(), indent=2, default=str), encoding="utf-8")
        print(f"[Report] Wrote {path}")
        return path


def print_summary(outcomes: List[Dict[str, Any]], agent: Optional[Dict[str, Any]] = None) -> None:
    print("\n=== Demo result ===")
    for o in outcomes:
        status = "PASS" if o.get("passed") else "FAIL"
        line = f"  - [{status}] {o.get('name')} ({o.get('strategy')}, {o.get('duration', 0.0):.2f}s)"
        if o.get("error"):
            line += f" error={o['error']}"
        print(line)
    if agent is not None:
        print(f"  - [{'PASS' if agent.get('success') else 'FAIL'}] Agent: {agent.get('message')}")
