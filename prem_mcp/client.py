# prem_mcp/client.py
import os
from urllib.parse import quote
from typing import Any

import httpx

from prem_mcp.config import Settings
from prem_mcp.errors import MalformedResponseError, RemoteError

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
DOCUMENT_CREATE_PATH = "/v1/repositories/{repository_id}/document"
UPLOAD_CONTENT_TYPE = "text/plain"


class PremClient:
    """Thin async wrapper over the Prem HTTP API (chat completions + repository documents)."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def start(self):
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self.settings.base_url,
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
                timeout=self.settings.http_timeout,
                transport=self._transport,
            )

    async def close(self):
        if self._http:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def create_chat_completion(self, payload: dict) -> dict[str, Any]:
        return await self._request("POST", CHAT_COMPLETIONS_PATH, json=payload)

    async def create_document(self, repository_id: str, file_path: str) -> dict[str, Any]:
        """
        파일을 multipart 로 그대로 스트리밍
        content type 은 실제 형식과 무관하게 text/plain 으로 보낸다
        """
        file_name = os.path.basename(file_path)
        with open(file_path, "rb") as fh:
            return await self._request(
                "POST",
                DOCUMENT_CREATE_PATH.format(repository_id=quote(repository_id, safe="")),
                files={"file": (file_name, fh, UPLOAD_CONTENT_TYPE)},
            )

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        if self._http is None:
            await self.start()

        try:
            res = await self._http.request(method, path, **kwargs)
        except httpx.ConnectError as e:
            raise RemoteError(f"Prem API connection failed: {e}")
        except httpx.TimeoutException:
            raise RemoteError("Prem API request timed out")
        except httpx.HTTPError as e:
            raise RemoteError(f"Prem API request failed: {e}")

        if res.status_code >= 400:
            raise RemoteError(
                f"Prem API error {res.status_code}: {_error_text(res)}",
                status_code=res.status_code,
            )

        try:
            data = res.json()
        except ValueError:
            raise MalformedResponseError(f"Prem API returned non-JSON body: {res.text[:200]}")

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Prem API returned {type(data).__name__}, expected an object"
            )
        return data


def _error_text(res: httpx.Response) -> str:
    try:
        body = res.json()
    except ValueError:
        return res.text or res.reason_phrase

    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if body.get(key):
                return str(body[key])
    return res.text
