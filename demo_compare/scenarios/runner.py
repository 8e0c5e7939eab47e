import json
import time
from typing import Dict, List, Optional, Tuple

from .catalog import SCENARIOS
from .probes import missing_expectations, verify_outcome
from .surfaces import AutomationSurface, NaturalLanguageSurface, PlaywrightSurface
from ..agents.agent import Agent, AgentConfig
from ..ai.llm import preview
from ..core.config import AGENT_GOAL
from ..core.types import AgentResult, Scenario, ScenarioOutcome

# strategy -> (surface that acts, surfaces that read the result)
STRATEGIES: Dict[str, Tuple[AutomationSurface, List[AutomationSurface]]] = {
    "classic": (PlaywrightSurface(), [PlaywrightSurface()]),
    "ai": (NaturalLanguageSurface(), [NaturalLanguageSurface()]),
    "hybrid": (
        PlaywrightSurface(),
        [PlaywrightSurface(), NaturalLanguageSurface(extract_key="hybrid_extract", with_observe=False)],
    ),
}


def get_strategy(name: str) -> Tuple[AutomationSurface, List[AutomationSurface]]:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown strategy '{name}'. Known: {', '.join(STRATEGIES)}") from None


def run_scenario(session, scenario: Scenario, strategy: str = "classic") -> ScenarioOutcome:
    """Navigate, act and read back one scenario. Errors propagate to the caller."""
    actor, readers = get_strategy(strategy)
    page = session.page
    start = time.time()
    print(f"[Runner] [{strategy}] {scenario['name']}: /{scenario['path']}")

    # Arrange
    session.dialogs.clear()
    session.goto(scenario["path"])
    if scenario.get("ready_selector"):
        page.wait_for_selector(scenario["ready_selector"])

    baseline = None
    if scenario.get("compare_baseline"):
        baseline = readers[0].read(session, scenario) if isinstance(readers[0], PlaywrightSurface) else None

    # Act
    actor.perform(session, scenario)
    if scenario.get("settle_selector"):
        page.wait_for_selector(scenario["settle_selector"])

    # Assert
    values = {}
    observed = None
    for reader in readers:
        obs = reader.observe(session, scenario)
        if obs is not None:
            observed = obs
            print(f"[Runner] Observed ({reader.label}): {preview(obs)}")
        values[reader.label] = reader.read(session, scenario)
        print(f"[Runner] Result ({reader.label}): {preview(values[reader.label])}")

    passed = all(verify_outcome(scenario, v, baseline) for v in values.values())
    if not passed:
        for label, v in values.items():
            missing = missing_expectations(scenario, v)
            if missing:
                print(f"[Runner] {label} result is missing {missing}")

    outcome: ScenarioOutcome = {
        "scenario": scenario["key"],
        "name": scenario["name"],
        "strategy": strategy,
        "passed": passed,
        "value": values[readers[0].label] if len(values) == 1 else values,
        "observed": observed,
        "baseline": baseline,
        "error": None,
        "duration": round(time.time() - start, 2),
    }
    print(f"[Runner] {scenario['name']}: {'PASS' if passed else 'FAIL'} in {outcome['duration']:.2f}s")
    return outcome


def run_agent_task(session, config: Optional[AgentConfig] = None, goal: str = AGENT_GOAL) -> AgentResult:
    """Hand the whole goal to the agent; the runner does not decompose it."""
    agent = Agent(session, config or AgentConfig.from_env(), llm=session.llm)
    result = agent.execute(goal)
    print(f"[Runner] Agent raw result: {json.dumps(result, indent=2, default=str)}")
    if result and result.get("success"):
        print("[Runner] Agent completed successfully.")
    else:
        print(f"[Runner] Agent did not complete successfully: {preview(result)}")
    return result


def run_all(session, strategy: str = "classic", keys: Optional[List[str]] = None,
            on_outcome=None) -> List[ScenarioOutcome]:
    """Run scenarios in order on one session; a failing scenario is logged and the rest still run."""
    get_strategy(strategy)
    outcomes: List[ScenarioOutcome] = []
    for scenario in SCENARIOS:
        if keys and scenario["key"] not in keys:
            continue
        start = time.time()
        try:
            outcome = run_scenario(session, scenario, strategy)
        except Exception as err:
            print(f"[Runner] {scenario['name']} error: {err}")
            outcome = {
                "scenario": scenario["key"],
                "name": scenario["name"],
                "strategy": strategy,
                "passed": False,
                "value": None,
                "error": str(err),
                "duration": round(time.time() - start, 2),
            }
        if on_outcome is not None:
            on_outcome(session, outcome)
        outcomes.append(outcome)
    return outcomes
