import pydantic
import pytest

from prem_mcp.errors import ValidationError, describe
from prem_mcp.schemas import ChatRequest, Message, RepositoryContext


class TestMessage:
    def test_text_message(self):
        msg = Message(role="user", content="x")
        assert msg.model_dump(exclude_none=True) == {"role": "user", "content": "x"}

    def test_template_message_defaults_params(self):
        msg = Message(role="user", template_id="t")
        assert msg.params == {}

    def test_text_and_template_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Message(role="user", content="x", template_id="t")

    def test_empty_message_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Message(role="user")


class TestRepositoryContext:
    def test_defaults(self):
        ctx = RepositoryContext(ids=[1])
        assert ctx.similarity_threshold == 0.65
        assert ctx.limit == 3

    @pytest.mark.parametrize(
        "kwargs",
        [{"similarity_threshold": -0.1}, {"similarity_threshold": 1.01}, {"limit": -1}],
    )
    def test_out_of_range(self, kwargs):
        with pytest.raises(pydantic.ValidationError):
            RepositoryContext(ids=[1], **kwargs)


def test_chat_request_needs_a_message():
    with pytest.raises(pydantic.ValidationError):
        ChatRequest(project_id="p", messages=[])


def test_validation_error_summary_is_one_line():
    with pytest.raises(pydantic.ValidationError) as exc_info:
        RepositoryContext(ids=[1], limit=-1)

    err = ValidationError.from_pydantic(exc_info.value)
    assert err.detail.startswith("limit: ")
    assert "\n" not in err.detail
    assert describe(exc_info.value) == err.detail
