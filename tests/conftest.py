from unittest.mock import AsyncMock

import pytest

from prem_mcp.config import Settings
from prem_mcp.handlers import PremTools


@pytest.fixture()
def settings() -> Settings:
    return Settings(api_key="test-key", project_id="proj-1", base_url="https://prem.test")


@pytest.fixture()
def client():
    fake = AsyncMock()
    fake.create_chat_completion.return_value = {
        "choices": [{"message": {"role": "assistant", "content": "Hi"}, "finish_reason": "stop"}],
        "trace_id": "trace-123",
    }
    fake.create_document.return_value = {"document_id": 7, "status": "PENDING"}
    return fake


@pytest.fixture()
def tools(client) -> PremTools:
    return PremTools(client, project_id="proj-1")
