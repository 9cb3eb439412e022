# prem_mcp/errors.py
import pydantic


class PremMCPError(Exception):
    """Base error. `detail` is the human readable text shown to the caller."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ConfigurationError(PremMCPError):
    pass


class ValidationError(PremMCPError):
    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        # pydantic 의 여러 줄 메시지를 한 줄로
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
        return cls("; ".join(parts) or "invalid input")


class RemoteError(PremMCPError):
    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.status_code = status_code


class MalformedResponseError(PremMCPError):
    pass


def describe(exc: BaseException) -> str:
    if isinstance(exc, PremMCPError):
        return exc.detail
    if isinstance(exc, pydantic.ValidationError):
        return ValidationError.from_pydantic(exc).detail
    return str(exc) or exc.__class__.__name__
