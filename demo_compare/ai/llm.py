import json
from typing import Any, Optional

from langchain_openai import ChatOpenAI

from ..core.config import LLM_MODEL, require_api_key


def build_chat_model(model: Optional[str] = None, api_key: Optional[str] = None,
                     temperature: float = 0.1, timeout: int = 45) -> ChatOpenAI:
    return ChatOpenAI(
        model=model or LLM_MODEL,
        api_key=api_key or require_api_key(),
        temperature=temperature,
        timeout=timeout,
        max_retries=1,
    )


def content_text(content: Any) -> str:
    """Flatten OpenAI-style mixed content into a single string."""
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
            elif isinstance(block, str):
                parts.append(block)
        return "\n".join(parts).strip()
    return str(content)


def parse_json_reply(content: Any, source: str = "LLM") -> Any:
    """Parse a JSON reply, tolerating code fences and prose around the object."""
    raw_text = content_text(content)
    text = raw_text
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()

    try:
        return json.loads(text)
    except ValueError:
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(text[start: end + 1])
        except ValueError:
            pass
    raise RuntimeError(f"{source} returned non-JSON: {raw_text[:400]}")


def preview(value: Any, limit: int = 200) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    return text if len(text) <= limit else text[: limit - 3] + "..."
