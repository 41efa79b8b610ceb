"""Launch the proxy under uvicorn."""
from __future__ import annotations
import uvicorn

from gemini_proxy.common.config import ProxyConfig


def main() -> None:
    cfg = ProxyConfig.from_env()
    uvicorn.run(
        "gemini_proxy.serve.fastapi_app:app",
        host=cfg.host,
        port=cfg.port,
        log_level=cfg.log_level.lower(),
    )

if __name__ == "__main__":
    main()
