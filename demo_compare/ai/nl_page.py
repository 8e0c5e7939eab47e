"""
Natural-language automation over a Playwright page.

`act` resolves an instruction to concrete clicks/fills through a chat model
that only sees the collected DOM candidates; `observe` and `extract` read the
current page state back as descriptions or plain text.
"""

import json
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from .actions import normalize_actions, normalize_plan
from .executor import execute_actions
from .llm import build_chat_model, content_text, parse_json_reply, preview
from ..core.config import ACT_MAX_ROUNDS, ASSETS_DIR, MAX_PAGE_TEXT, TOP_K
from ..dom.elements import collect_candidates, format_candidates, visible_text
from ..dom.scoring import select_top

ACT_SYSTEM_PROMPT = (
    "You are a UI operator for a web page. You do NOT see screenshots.\n"
    "You receive an instruction, the actions already performed for it, and a list of DOM\n"
    "candidates with stable `id`, role, accessible name and landmark.\n"
    "\n"
    "Produce the SMALL sequence of concrete actions that advances the instruction on the\n"
    "current page, using ONLY the provided candidate ids. Return JSON ONLY:\n"
    "{\n"
    "  \"actions\": [\n"
    "    {\"action\": \"click\" | \"fill\" | \"select\" | \"press\" | \"check\" | \"upload\", \"target_id\": \"<id>\", \"params\": { ... }}\n"
    "  ],\n"
    "  \"done\": true | false,\n"
    "  \"message\": \"Short note about what these actions do\"\n"
    "}\n"
    "\n"
    "Action params:\n"
    "- click / check: { }\n"
    "- fill:   { \"text\": \"<string>\" }  (only textbox/combobox roles)\n"
    "- select: { \"option\": \"<visible label>\" }\n"
    "- press:  { \"key\": \"Enter|Tab|Escape|...\" }\n"
    "- upload: { \"file\": \"<file name>\" }  (only role=file)\n"
    "\n"
    "Rules:\n"
    "- When asked for example data, invent plausible values.\n"
    "- If the instruction needs a control that only appears after a click (a modal, a\n"
    "  sub-menu), return just that click with \"done\": false; you will be called again.\n"
    "- Set \"done\": true when the returned actions finish the instruction, or when the\n"
    "  page already satisfies it (then return an empty actions list).\n"
    "- Do NOT invent target ids. Avoid destructive controls unless asked.\n"
)

OBSERVE_SYSTEM_PROMPT = (
    "You describe the current state of a web page. You receive an instruction, the\n"
    "visible page text and a list of interactive candidates. Return JSON ONLY:\n"
    "{\"observations\": [{\"description\": \"<what you see>\", \"target_id\": \"<candidate id or null>\"}]}\n"
    "List only what the instruction asks about; reference a candidate id when one matches."
)

EXTRACT_SYSTEM_PROMPT = (
    "You extract information from a web page. You receive an instruction and the\n"
    "visible page text. Return JSON ONLY: {\"extraction\": \"<the requested information as text>\"}.\n"
    "Copy values exactly as they appear on the page. If the information is not present,\n"
    "return an empty string."
)


class NaturalLanguagePage:
    """act / observe / extract on top of a live Playwright page."""

    def __init__(self, page, llm: Any = None, max_rounds: int = ACT_MAX_ROUNDS):
        self.page = page
        self._llm = llm
        self.max_rounds = max_rounds

    @property
    def llm(self):
        if self._llm is None:
            self._llm = build_chat_model()
        return self._llm

    def _invoke(self, system_prompt: str, human_text: str, source: str) -> Any:
        try:
            result = self.llm.invoke([SystemMessage(content=system_prompt), HumanMessage(content=human_text)])
        except Exception as e:
            print(f"[NL] {source} model call failed: {e}")
            raise
        return parse_json_reply(result.content, source=source)

    def page_text(self) -> str:
        return visible_text(self.page, MAX_PAGE_TEXT)

    def act(self, instruction: str) -> List[Dict[str, Any]]:
        """Perform an instruction; returns every action that was executed (empty when the page already satisfies it)."""
        print(f"[NL] act: {preview(instruction)}")
        performed: List[Dict[str, Any]] = []
        assets = sorted(p.name for p in ASSETS_DIR.iterdir() if p.is_file())

        for round_no in range(1, self.max_rounds + 1):
            candidates = select_top(collect_candidates(self.page), instruction, TOP_K)
            if not candidates:
                raise RuntimeError("No interactive candidates found on the page.")

            human_text = (
                f"Instruction: {instruction}\n"
                f"Already performed: {json.dumps(performed)}\n"
                f"Files available for upload: {assets}\n\n"
                "Candidates (id, role, name, landmark):\n"
                f"{format_candidates(candidates)}\n\n"
                "Return JSON as specified in the system message."
            )
            plan = normalize_plan(self._invoke(ACT_SYSTEM_PROMPT, human_text, "act"))
            actions = normalize_actions(plan["actions"], candidates)
            print(f"[NL] Round {round_no}: done={plan['done']} actions={actions} message='{plan['message']}'")

            if plan["done"] and not plan["actions"] and not performed:
                print(f"[NL] Page already satisfies the instruction: {plan['message']}")
                return []

            executed = execute_actions(self.page, actions, candidates)
            performed.extend(executed)
            if plan["done"] or not executed:
                break

        if not performed:
            raise RuntimeError(f"Could not perform instruction: {instruction}")
        return performed

    def observe(self, instruction: str) -> List[Dict[str, Any]]:
        """Return observations (description plus matching candidate, if any)."""
        print(f"[NL] observe: {preview(instruction)}")
        candidates = select_top(collect_candidates(self.page), instruction, TOP_K)
        by_id = {e["id"]: e for e in candidates}
        human_text = (
            f"Instruction: {instruction}\n\n"
            f"Visible page text:\n{self.page_text()}\n\n"
            "Candidates (id, role, name, landmark):\n"
            f"{format_candidates(candidates)}"
        )
        parsed = self._invoke(OBSERVE_SYSTEM_PROMPT, human_text, "observe")
        raw = parsed.get("observations") if isinstance(parsed, dict) else parsed
        if isinstance(raw, (str, dict)):
            raw = [raw]
        observations = []
        for item in raw or []:
            if isinstance(item, str):
                item = {"description": item}
            if not isinstance(item, dict) or not item.get("description"):
                continue
            target = by_id.get(str(item.get("target_id")))
            observations.append({
                "description": item["description"],
                "target_id": target["id"] if target else None,
                "role": target["role"] if target else None,
                "name": target["name"] if target else None,
            })
        print(f"[NL] Observed: {preview(observations)}")
        return observations

    def extract(self, instruction: str) -> str:
        """Return the requested information from the visible page as text."""
        print(f"[NL] extract: {preview(instruction)}")
        human_text = f"Instruction: {instruction}\n\nVisible page text:\n{self.page_text()}"
        parsed = self._invoke(EXTRACT_SYSTEM_PROMPT, human_text, "extract")
        value: Optional[Any] = parsed.get("extraction") if isinstance(parsed, dict) else parsed
        if isinstance(value, (list, dict)):
            value = json.dumps(value)
        extraction = content_text(value) if value is not None else ""
        print(f"[NL] Extracted: {preview(extraction)}")
        return extraction
