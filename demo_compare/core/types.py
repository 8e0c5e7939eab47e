from typing import Any, Dict, List, Optional, TypedDict


class Step(TypedDict, total=False):
    action: str  # "fill" | "click" | "click_last" | "upload"
    selector: str
    value: Optional[str]


class Probe(TypedDict, total=False):
    kind: str  # "text" | "rows" | "texts" | "input_value" | "visible" | "dialog"
    selector: Optional[str]


class Scenario(TypedDict, total=False):
    key: str
    name: str
    path: str
    ready_selector: Optional[str]
    steps: List[Step]
    instruction: Optional[str]
    settle_selector: Optional[str]
    probe: Probe
    observe: Optional[str]
    extract: Optional[str]
    hybrid_extract: Optional[str]
    expect_contains: List[str]
    compare_baseline: bool


class ScenarioOutcome(TypedDict, total=False):
    scenario: str
    name: str
    strategy: str
    passed: bool
    value: Any
    observed: Any
    baseline: Any
    error: Optional[str]
    duration: float
    screenshot: Optional[str]


class AgentResult(TypedDict, total=False):
    success: bool
    completed: bool
    message: str
    actions: List[Dict[str, Any]]
    steps: int


class AgentState(TypedDict, total=False):
    goal: str
    instructions: str
    start_url: Optional[str]
    history: List[str]
    elements: List[Dict[str, Any]]
    page_text: str
    url: str
    screenshot_path: Optional[str]
    screenshot_png: Optional[bytes]
    actions: List[Dict[str, Any]]
    executed: List[Dict[str, Any]]
    message: str
    step: int
    max_steps: int
    done: bool
    success: bool
    completion_via: Optional[str]
    # Live handles (in-memory only)
    page: Any
    llm: Any
    run_dir: str
