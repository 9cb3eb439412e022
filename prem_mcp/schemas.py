# prem_mcp/schemas.py
from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

DEFAULT_SIMILARITY_THRESHOLD = 0.65
DEFAULT_LIMIT = 3


# -----------------------
# Prem API request
# -----------------------
class Message(BaseModel):
    role: str = "user"
    content: str | None = None
    template_id: str | None = None
    params: dict[str, str] | None = None

    @model_validator(mode="after")
    def _text_or_template(self):
        has_text = self.content is not None
        has_template = self.template_id is not None
        if has_text == has_template:
            raise ValueError("message needs either content or template_id, not both")
        if has_template and self.params is None:
            self.params = {}
        return self


class RepositoryContext(BaseModel):
    ids: list[int]
    similarity_threshold: float = Field(DEFAULT_SIMILARITY_THRESHOLD, ge=0.0, le=1.0)
    limit: int = Field(DEFAULT_LIMIT, ge=0)


class ChatRequest(BaseModel):
    project_id: str
    messages: list[Message] = Field(min_length=1)
    model: str | None = None
    system_prompt: str | None = None
    session_id: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    stream: bool | None = None
    repositories: RepositoryContext | None = None

    def to_payload(self) -> dict:
        # 값이 없는 필드는 아예 보내지 않는다 (Prem 쪽 기본값 사용)
        return self.model_dump(exclude_none=True)


# -----------------------
# Tool arguments
# -----------------------
class ChatArgs(BaseModel):
    query: str
    system_prompt: str | None = None
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    repository_ids: list[int] | None = None
    similarity_threshold: float | None = None
    limit: int | None = None


class TemplateChatArgs(BaseModel):
    template_id: str
    params: dict[str, str]
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


class UploadArgs(BaseModel):
    repository_id: str
    file_path: str
