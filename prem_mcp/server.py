# prem_mcp/server.py
import asyncio
import json
import sys

import pydantic

from prem_mcp import SERVER_NAME, SERVER_VERSION
from prem_mcp.client import PremClient
from prem_mcp.config import load_settings
from prem_mcp.errors import ConfigurationError, describe
from prem_mcp.handlers import PremTools
from prem_mcp.log import log
from prem_mcp.tools import TOOL_ARGS, TOOLS

PROTOCOL_VERSION = "2025-06-18"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RpcError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def write_stdout(message: dict):
    sys.stdout.write(json.dumps(message, ensure_ascii=False) + "\n")
    sys.stdout.flush()


class PremMCPServer:
    """JSON-RPC 2.0 over newline-delimited stdio."""

    def __init__(self, tools: PremTools, write=write_stdout):
        self.tools = tools
        self.write = write
        self._tasks: set[asyncio.Task] = set()
        self._handlers = {
            "chat": tools.chat,
            "prem_upload_document": tools.upload_document,
            "prem_chat_with_template": tools.chat_with_template,
        }

    def send_result(self, id_, result):
        self.write({"jsonrpc": "2.0", "id": id_, "result": result})

    def send_error(self, id_, code: int, message: str):
        self.write({"jsonrpc": "2.0", "id": id_, "error": {"code": code, "message": message}})

    async def handle(self, req: dict):
        method = req.get("method")

        # ---------------------------
        # MCP handshake
        # ---------------------------
        if method == "initialize":
            return {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
                "capabilities": {"tools": {}},
            }

        if method == "ping":
            return {}

        # ---------------------------
        # Tool list
        # ---------------------------
        if method == "tools/list":
            return {"tools": list(TOOLS.values())}

        # ---------------------------
        # Tool call
        # ---------------------------
        if method == "tools/call":
            params = req.get("params") or {}
            name = params.get("name")
            handler = self._handlers.get(name)
            if handler is None:
                raise RpcError(INVALID_PARAMS, f"Unknown tool: {name}")

            try:
                args = TOOL_ARGS[name].model_validate(params.get("arguments") or {})
            except pydantic.ValidationError as e:
                raise RpcError(INVALID_PARAMS, f"Invalid arguments for {name}: {describe(e)}")

            return await handler(**args.model_dump())

        raise RpcError(METHOD_NOT_FOUND, f"Unknown method: {method}")

    async def process(self, req: dict):
        req_id = req.get("id")
        method = req.get("method", "unknown")

        try:
            result = await self.handle(req)
        except RpcError as e:
            log(f"Error processing {method}: {e.message}")
            if req_id is not None:
                self.send_error(req_id, e.code, e.message)
            return
        except Exception as e:
            log(f"Error processing {method}: {e}")
            if req_id is not None:
                self.send_error(req_id, INTERNAL_ERROR, str(e))
            return

        # Notification (id가 없는 메시지)은 응답하지 않음
        if req_id is not None:
            self.send_result(req_id, result)

    def dispatch_line(self, line: str):
        line = line.strip()
        if not line:
            return

        try:
            req = json.loads(line)
        except json.JSONDecodeError as e:
            self.send_error(None, PARSE_ERROR, f"Parse error: {e}")
            return

        if not isinstance(req, dict) or not isinstance(req.get("method"), str):
            req_id = req.get("id") if isinstance(req, dict) else None
            self.send_error(req_id, INVALID_REQUEST, "Invalid request")
            return

        method = req["method"]
        if method.startswith("notifications/"):
            log(f"Skipped notification: {method}")
            return

        log(f"Received: {method}")
        # tool 호출끼리는 서로 기다리지 않는다
        task = asyncio.create_task(self.process(req))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def serve(self, reader: asyncio.StreamReader):
        while True:
            raw = await reader.readline()
            if not raw:
                break
            self.dispatch_line(raw.decode("utf-8", errors="replace"))

        if self._tasks:
            await asyncio.gather(*list(self._tasks))


async def stdin_reader() -> asyncio.StreamReader:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=2**24)
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    return reader


async def run():
    settings = load_settings()

    async with PremClient(settings) as client:
        server = PremMCPServer(PremTools(client, settings.project_id))
        log("All tools registered")
        log("Starting Prem MCP server...")
        try:
            reader = await stdin_reader()
            log("Prem AI MCP server running on stdio")
            await server.serve(reader)
        except (OSError, ValueError) as e:
            log(f"Transport error: {e}")
            raise


def main():
    try:
        asyncio.run(run())
    except ConfigurationError as e:
        log(f"Fatal server error: {e.detail}")
        sys.exit(1)
    except KeyboardInterrupt:
        log("Shutting down gracefully...")
    except Exception as e:
        log(f"Fatal server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
