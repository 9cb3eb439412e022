# prem_mcp/handlers.py
import json
import os
import secrets
import string
import time
import uuid
from contextlib import contextmanager

from prem_mcp.client import PremClient
from prem_mcp.errors import ValidationError, describe
from prem_mcp.log import log
from prem_mcp.schemas import (
    DEFAULT_LIMIT,
    DEFAULT_SIMILARITY_THRESHOLD,
    ChatRequest,
    Message,
    RepositoryContext,
)

_ID_ALPHABET = string.ascii_lowercase + string.digits


# -----------------------
# Response envelope
# -----------------------
def text_result(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


def error_result(prefix: str, exc: BaseException) -> dict:
    result = text_result(f"{prefix}: {describe(exc)}")
    result["isError"] = True
    return result


def to_json_text(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def new_request_id(prefix: str) -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(5))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


class PremTools:
    """The three MCP tools. One instance per server, owns the in-flight request set."""

    def __init__(self, client: PremClient, project_id: str):
        self.client = client
        self.project_id = project_id
        self.active_requests: set[str] = set()

    @contextmanager
    def _track(self, prefix: str):
        request_id = new_request_id(prefix)
        self.active_requests.add(request_id)
        try:
            yield request_id
        finally:
            self.active_requests.discard(request_id)

    async def chat(
        self,
        query: str,
        system_prompt: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        repository_ids: list[int] | None = None,
        similarity_threshold: float | None = None,
        limit: int | None = None,
    ) -> dict:
        with self._track("chat") as request_id:
            try:
                repositories = None
                if repository_ids is not None:
                    repositories = RepositoryContext(
                        ids=repository_ids,
                        similarity_threshold=(
                            DEFAULT_SIMILARITY_THRESHOLD
                            if similarity_threshold is None
                            else similarity_threshold
                        ),
                        limit=DEFAULT_LIMIT if limit is None else limit,
                    )

                request = ChatRequest(
                    project_id=self.project_id,
                    messages=[Message(role="user", content=query)],
                    model=model,
                    system_prompt=system_prompt,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    repositories=repositories,
                )
                return await self._complete(request_id, request)
            except Exception as e:
                log(f"[{request_id}] Chat error: {describe(e)}")
                return error_result("Chat error", e)

    async def chat_with_template(
        self,
        template_id: str,
        params: dict[str, str],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict:
        with self._track("template") as request_id:
            try:
                request = ChatRequest(
                    project_id=self.project_id,
                    messages=[Message(role="user", template_id=template_id, params=params)],
                    model=model,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
                return await self._complete(request_id, request)
            except Exception as e:
                log(f"[{request_id}] Template chat error: {describe(e)}")
                return error_result("Template chat error", e)

    async def _complete(self, request_id: str, request: ChatRequest) -> dict:
        log(f"[{request_id}] Sending chat completion ({len(self.active_requests)} in flight)")
        response = await self.client.create_chat_completion(request.to_payload())

        # choices 가 없으면 실패 대신 빈 목록으로 대체
        data = response if "choices" in response else {"choices": []}
        return text_result(to_json_text(data))

    async def upload_document(self, repository_id: str, file_path: str) -> dict:
        request_id = str(uuid.uuid4())
        log(f"[{request_id}] Starting document upload to repository {repository_id}")

        try:
            if not os.path.isfile(file_path) or not os.access(file_path, os.R_OK):
                raise ValidationError(f"File not found: {file_path}")

            size = os.path.getsize(file_path)
            log(f"[{request_id}] Uploading {os.path.basename(file_path)} ({size} bytes)")
            response = await self.client.create_document(repository_id, file_path)

            log(f"[{request_id}] Document upload successful: {json.dumps(response)}")
            return text_result(to_json_text(response))
        except Exception as e:
            log(f"[{request_id}] Document upload error: {describe(e)}")
            return error_result("Document upload error", e)
