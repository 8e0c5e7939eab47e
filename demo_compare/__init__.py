"""
Deterministic vs natural-language browser automation, side by side.

This package contains the scenario table for the DemoQA site, the two
automation surfaces (Playwright selectors and an LLM-driven page), the
autonomous agent, and the runner that ties them together.
"""
