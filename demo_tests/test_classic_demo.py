"""Selector-driven Playwright run of every DemoQA scenario."""

import pytest

from demo_compare.scenarios.catalog import SCENARIOS, get_scenario
from demo_compare.scenarios.runner import run_scenario

pytestmark = pytest.mark.e2e


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s["key"])
def test_scenario(live_session, scenario):
    outcome = run_scenario(live_session, scenario, "classic")
    assert outcome["passed"], outcome


def test_table_row_was_appended(live_session):
    outcome = run_scenario(live_session, get_scenario("web_tables"), "classic")
    assert len(outcome["value"]) > len(outcome["baseline"])
