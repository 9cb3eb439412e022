# prem_mcp/log.py
import sys

PREFIX = "[PREM-MCP]"


def log(message: str):
    # stdout 은 JSON-RPC 전용, 로그는 전부 stderr
    print(f"{PREFIX} {message}", file=sys.stderr, flush=True)
