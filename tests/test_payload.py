from __future__ import annotations

from gemini_proxy.common.payload import FALLBACK_TEXT, build_payload, extract_text


def test_build_payload_wraps_prompt_untouched() -> None:
    prompt = "  <script>raw</script>\n" * 3
    assert build_payload(prompt) == {"contents": [{"parts": [{"text": prompt}]}]}


def test_extract_text_first_candidate_first_part() -> None:
    result = {
        "candidates": [
            {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
            {"content": {"parts": [{"text": "other candidate"}]}},
        ]
    }
    assert extract_text(result) == "first"


def test_extract_text_fallbacks() -> None:
    for result in (
        None,
        [],
        {},
        {"candidates": None},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": [{}]}}]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
    ):
        assert extract_text(result) == FALLBACK_TEXT
