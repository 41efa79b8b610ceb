"""FastAPI proxy for the Gemini generateContent API.

Endpoints:
- GET /health
- POST /api/generate  { "prompt": "..." }

The API key lives only in server configuration and is sent upstream as a
query parameter; callers never see it.
"""
from __future__ import annotations
import json
import logging
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gemini_proxy.common.config import ProxyConfig
from gemini_proxy.common.logging_setup import redact, setup_logging
from gemini_proxy.common.payload import build_payload, extract_text
from gemini_proxy.common.schema import ErrorOut, GenerateOut
from gemini_proxy.serve.retry import fetch_with_retry

LOGGER = logging.getLogger("gemini_proxy.serve.app")

MISSING_KEY_ERROR = "GEMINI_API_KEY environment variable is not set on the Vercel server."
METHOD_NOT_ALLOWED_ERROR = "Method Not Allowed. Use POST."
MISSING_PROMPT_ERROR = 'Missing "prompt" in request body.'


def _error(status_code: int, message: Any) -> JSONResponse:
    if message is not None and not isinstance(message, str):
        message = str(message)
    return JSONResponse(ErrorOut(error=message).model_dump(), status_code=status_code)


def _upstream_status(code: Any) -> int:
    """Use the upstream error code as our status when it is a usable one."""
    if isinstance(code, int) and not isinstance(code, bool) and 100 <= code <= 599:
        return code
    return 500


async def _read_prompt(request: Request) -> Any:
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("prompt")


def _map_result(result: Any) -> JSONResponse:
    if result is None:
        raise ValueError("Upstream returned a null JSON body")
    if isinstance(result, dict) and result.get("error"):
        err = result["error"]
        if not isinstance(err, dict):
            return _error(500, None)
        return _error(_upstream_status(err.get("code")), err.get("message"))
    return JSONResponse(GenerateOut(text=extract_text(result)).model_dump(), status_code=200)


def create_app(config: ProxyConfig | None = None) -> FastAPI:
    """
    Build the proxy application.

    Args:
        config: Process configuration; read from the environment when omitted.
    """
    cfg = config or ProxyConfig.from_env()
    app = FastAPI(title="Gemini Proxy")
    app.state.config = cfg

    if cfg.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cfg.cors_origins),
            allow_methods=["POST"],
            allow_headers=["Content-Type"],
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "model": cfg.model}

    async def generate(request: Request) -> JSONResponse:
        if not cfg.api_key:
            return _error(500, MISSING_KEY_ERROR)
        if request.method != "POST":
            return _error(405, METHOD_NOT_ALLOWED_ERROR)

        prompt = await _read_prompt(request)
        if not prompt:
            return _error(400, MISSING_PROMPT_ERROR)

        payload = build_payload(prompt)
        try:
            async with httpx.AsyncClient(timeout=cfg.timeout) as client:
                response = await fetch_with_retry(
                    client,
                    cfg.api_url,
                    method="POST",
                    headers={"Content-Type": "application/json"},
                    content=json.dumps(payload),
                    params={"key": cfg.api_key},
                    retries=cfg.max_retries,
                )
                result = response.json()
            return _map_result(result)
        except Exception as e:
            message = redact(str(e), (cfg.api_key,))
            LOGGER.error("Error during Gemini API call: %s", message)
            return _error(500, f"Internal Server Error: {message}")

    # methods=None matches every method, so non-POST requests get our own 405 body.
    app.add_route("/api/generate", generate, methods=None)

    return app


CONFIG = ProxyConfig.from_env()
setup_logging(CONFIG.log_level, secrets=(CONFIG.api_key,))
app = create_app(CONFIG)
