"""
Freestanding demo runner: opens one browser session, runs every DemoQA
scenario with the chosen strategy, then hands the button-listing task to
the autonomous agent.

A failing scenario is logged and the rest still run; the process exits
non-zero only when the runner itself fails.
"""

from __future__ import annotations

import argparse
import sys

from demo_compare.core.report import RunReport, print_summary
from demo_compare.core.session import browser_session
from demo_compare.scenarios.catalog import SCENARIOS_BY_KEY
from demo_compare.scenarios.runner import STRATEGIES, run_agent_task, run_all


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the DemoQA automation scenarios.")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default="ai")
    parser.add_argument("--only", nargs="+", choices=sorted(SCENARIOS_BY_KEY), metavar="KEY",
                        help="run only these scenarios")
    parser.add_argument("--headless", action="store_true", default=None)
    parser.add_argument("--skip-agent", action="store_true")
    parser.add_argument("--no-report", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    report = RunReport(args.strategy)
    agent_result = None

    with browser_session(headless=args.headless) as session:
        outcomes = run_all(
            session,
            strategy=args.strategy,
            keys=args.only,
            on_outcome=None if args.no_report else report.record,
        )
        if not args.skip_agent:
            try:
                agent_result = run_agent_task(session)
            except Exception as err:
                print(f"[Runner] Agent error: {err}")
                agent_result = {"success": False, "completed": False, "message": str(err)}
            report.agent = agent_result

    if not args.no_report:
        report.write()
    print_summary(outcomes, agent_result)


if __name__ == "__main__":
    try:
        main()
    except Exception as err:
        print(err)
        sys.exit(1)
