"""Process configuration, read once at startup."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


def load_cfg(path: str) -> dict[str, Any]:
    """
    Load a YAML config file.

    Args:
        path: Path to the YAML file.

    Returns:
        Mapping of config keys, empty if the file is empty.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def _split_origins(value: str | list[str] | None) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(o.strip() for o in value if o and o.strip())


@dataclass(frozen=True)
class ProxyConfig:
    api_key: str | None = field(default=None, repr=False)
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    max_retries: int = 3
    timeout: float = 120.0
    cors_origins: tuple[str, ...] = ()
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def api_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ProxyConfig:
        """Build config from the environment, layered over an optional YAML file.

        The file named by GEMINI_PROXY_CONFIG supplies defaults; environment
        variables win. The API key is only ever taken from the environment.
        """
        env = os.environ if environ is None else environ
        cfg_path = env.get("GEMINI_PROXY_CONFIG")
        file_cfg = load_cfg(cfg_path) if cfg_path else {}

        def pick(env_name: str, key: str, default: Any) -> Any:
            value = env.get(env_name)
            if value is None or value == "":
                return file_cfg.get(key, default)
            return value

        return cls(
            api_key=env.get("GEMINI_API_KEY") or None,
            model=str(pick("GEMINI_MODEL", "model", DEFAULT_MODEL)),
            api_base=str(pick("GEMINI_API_BASE", "api_base", DEFAULT_API_BASE)),
            max_retries=int(pick("GEMINI_MAX_RETRIES", "max_retries", 3)),
            timeout=float(pick("GEMINI_TIMEOUT", "timeout", 120.0)),
            cors_origins=_split_origins(pick("CORS_ORIGINS", "cors_origins", None)),
            log_level=str(pick("LOG_LEVEL", "log_level", "INFO")).upper(),
            host=str(pick("PROXY_HOST", "host", "0.0.0.0")),
            port=int(pick("PROXY_PORT", "port", 8000)),
        )
