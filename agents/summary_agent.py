from typing import Optional

from agents.llm_client import GenerateFn
from agents.prompts import build_prompt
from models import ReviewMode

SUMMARY_HEADER = "🤖 **Gemini Summary Review**"


def summary_agent(generate: GenerateFn, api_key: str, language: str, diff_text: str) -> Optional[str]:
    prompt = build_prompt(language, ReviewMode.SUMMARY, diff_text)
    out = generate(prompt, api_key)
    if not out or not out.strip():
        return None
    return f"{SUMMARY_HEADER}\n\n{out.strip()}"
