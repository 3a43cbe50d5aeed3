# agents/llm_client.py
import logging
from typing import Callable, Optional

import google.generativeai as genai

logger = logging.getLogger(__name__)

MODEL_NAME = "gemini-2.5-flash"   # or gemini-2.5-pro for higher accuracy

# (prompt, api_key) -> text or None
GenerateFn = Callable[[str, str], Optional[str]]


def call_gemini(prompt: str, api_key: str, model: str = MODEL_NAME) -> Optional[str]:
    """
    Send one prompt to Gemini with the given API key and return the text.

    Returns None when the model produced no usable candidate (empty or
    blocked response). Transport and auth errors propagate.

    The SDK call blocks. The reviewer awaits nothing concurrently with it,
    so it is called directly from the async pipeline.
    """
    genai.configure(api_key=api_key)
    response = genai.GenerativeModel(model).generate_content(prompt)

    try:
        text = response.text
    except ValueError as e:
        # .text raises when the candidate has no parts (safety block, empty finish)
        logger.warning("⚠️ Gemini returned no text: %s", e)
        return None

    return text.strip() if text else None


def make_generator(model: str) -> GenerateFn:
    def generate(prompt: str, api_key: str) -> Optional[str]:
        return call_gemini(prompt, api_key, model=model)

    return generate
