"""
Tracing settings.

Read once from the environment and cached; reset_config() forces a re-read.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass
class PhoenixConfig:
    """Where and whether spans are exported.

    Environment Variables:
        PHOENIX_ENABLED: Enable Phoenix tracing (default: false)
        PHOENIX_PROJECT_NAME: Project name in Phoenix UI (default: movie-rag)
        PHOENIX_COLLECTOR_ENDPOINT: Remote OTLP endpoint; a local Phoenix app is launched when empty
        PHOENIX_CAPTURE_LLM_CONTENT: Put question text, prompts and answers on spans (default: false)
    """

    enabled: bool = False
    project_name: str = "movie-rag"
    collector_endpoint: str | None = None
    capture_llm_content: bool = False

    @property
    def is_remote(self) -> bool:
        return bool(self.collector_endpoint)

    def traces_endpoint(self, local_app_url: str | None = None) -> str:
        """OTLP traces URL: the remote collector, else the local app's /v1/traces."""
        if self.collector_endpoint:
            return self.collector_endpoint
        if not local_app_url:
            raise ValueError("No collector endpoint configured and no local Phoenix app URL given")
        return f"{local_app_url.rstrip('/')}/v1/traces"

    @classmethod
    def from_env(cls) -> "PhoenixConfig":
        return cls(
            enabled=_env_flag("PHOENIX_ENABLED"),
            project_name=os.environ.get("PHOENIX_PROJECT_NAME", "movie-rag"),
            collector_endpoint=os.environ.get("PHOENIX_COLLECTOR_ENDPOINT") or None,
            capture_llm_content=_env_flag("PHOENIX_CAPTURE_LLM_CONTENT"),
        )


_config: PhoenixConfig | None = None


def get_config() -> PhoenixConfig:
    """The cached PhoenixConfig, loaded from env on first call."""
    global _config
    if _config is None:
        _config = PhoenixConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None
