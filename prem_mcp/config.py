# prem_mcp/config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from prem_mcp.errors import ConfigurationError

DEFAULT_BASE_URL = "https://app.premai.io"
DEFAULT_HTTP_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    api_key: str
    project_id: str
    base_url: str = DEFAULT_BASE_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def load_settings() -> Settings:
    """
    .env + 환경변수 → Settings
    PREM_API_KEY / PREM_PROJECT_ID 가 없으면 바로 실패
    """
    load_dotenv()

    api_key = os.getenv("PREM_API_KEY")
    project_id = os.getenv("PREM_PROJECT_ID")

    if not api_key:
        raise ConfigurationError("PREM_API_KEY environment variable is required")
    if not project_id:
        raise ConfigurationError("PREM_PROJECT_ID environment variable is required")

    timeout_raw = os.getenv("PREM_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))
    try:
        http_timeout = float(timeout_raw)
    except ValueError:
        raise ConfigurationError(f"PREM_HTTP_TIMEOUT must be a number, got {timeout_raw!r}")

    return Settings(
        api_key=api_key,
        project_id=project_id,
        base_url=os.getenv("PREM_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        http_timeout=http_timeout,
    )
