"""Gemini request/response shaping helpers."""
from __future__ import annotations
from typing import Any

FALLBACK_TEXT = "Generation failed to return text."


def build_payload(prompt: Any) -> dict[str, Any]:
    """
    Wrap a prompt in a generateContent request body.

    Args:
        prompt: Prompt as received from the caller; passed through untouched.

    Returns:
        JSON-serialisable payload with a single content part.
    """
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_text(result: Any) -> str:
    """
    Pull the first candidate's first text part out of a generateContent result.

    Falls back to FALLBACK_TEXT when the path is missing or holds no text.
    """
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_TEXT
    if not isinstance(text, str) or not text:
        return FALLBACK_TEXT
    return text
