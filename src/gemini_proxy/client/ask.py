"""Send a prompt to a running proxy and print the generated text."""
from __future__ import annotations
import argparse
import logging
import sys
import time
from typing import Any

import httpx

from gemini_proxy.common.logging_setup import setup_logging

LOGGER = logging.getLogger("gemini_proxy.client.ask")

DEFAULT_URL = "http://localhost:8000/api/generate"


class ProxyError(Exception):
    """The proxy answered with an error body."""

    def __init__(self, status_code: int, message: Any) -> None:
        self.status_code = status_code
        super().__init__(f"{status_code}: {message}")


def ask(prompt: str, url: str = DEFAULT_URL, timeout: float = 300.0) -> str:
    """
    Post a prompt to the proxy.

    Args:
        prompt: Prompt text.
        url: Proxy endpoint.
        timeout: Overall request timeout in seconds.

    Returns:
        Generated text.
    """
    with httpx.Client(timeout=timeout) as client:
        r = client.post(url, json={"prompt": prompt})
    try:
        data = r.json()
    except ValueError:
        raise ProxyError(r.status_code, r.text)
    if not isinstance(data, dict):
        raise ProxyError(r.status_code, data)
    if r.status_code != 200 or "text" not in data:
        raise ProxyError(r.status_code, data.get("error"))
    return data["text"]


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    ap = argparse.ArgumentParser(description="Ask a Gemini proxy for a completion")
    ap.add_argument("--prompt", required=True, help="Prompt text")
    ap.add_argument("--url", default=DEFAULT_URL, help="Proxy endpoint URL")
    ap.add_argument("--timeout", type=float, default=300.0)
    args = ap.parse_args(argv)

    start = time.time()
    try:
        text = ask(args.prompt, args.url, args.timeout)
    except (ProxyError, httpx.HTTPError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    LOGGER.info("Latency: %sms", int((time.time() - start) * 1000))
    print(text)
    return 0

if __name__ == "__main__":
    sys.exit(main())
