"""
Tests for the answer generator and the model clients.

HF client uses httpx.MockTransport; OpenAI client gets a mocked SDK client.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest

from rescueline.agent.llm import HFRouterChatModel, OpenAIChatModel
from rescueline.core.errors import GenerationFailureError
from rescueline.services.answer_generator import FALLBACK_ANSWER, AnswerGenerator, AnswerResult

from conftest import FakeModel


class TestAnswerGenerator:
    def test_success(self) -> None:
        model = FakeModel(answer="  Go to the stadium.  ")
        result = AnswerGenerator(model).generate_answer("prompt")
        assert result == AnswerResult(answer_text="Go to the stadium.", is_fallback=False)
        assert model.prompts == ["prompt"]

    @pytest.mark.parametrize(
        "error",
        [GenerationFailureError("quota"), httpx.ConnectTimeout("timed out"), KeyError("choices")],
    )
    def test_failure_returns_fallback(self, error: Exception) -> None:
        model = FakeModel(error=error)
        result = AnswerGenerator(model).generate_answer("prompt")
        assert result == AnswerResult(answer_text=FALLBACK_ANSWER, is_fallback=True)
        assert len(model.prompts) == 1

    def test_empty_output_is_fallback(self) -> None:
        result = AnswerGenerator(FakeModel(answer="   ")).generate_answer("prompt")
        assert result.is_fallback
        assert result.answer_text == FALLBACK_ANSWER


class TestHFRouterChatModel:
    def _model(self, handler) -> HFRouterChatModel:
        return HFRouterChatModel(api_key="hf_test", model="test/model", transport=httpx.MockTransport(handler))

    def test_returns_content(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.content
            return httpx.Response(200, json={"choices": [{"message": {"content": " Stay indoors. "}}]})

        assert self._model(handler).generate("hello") == "Stay indoors."
        assert seen["auth"] == "Bearer hf_test"
        assert b'"model":"test/model"' in seen["body"].replace(b" ", b"")

    def test_non_200_raises(self) -> None:
        model = self._model(lambda request: httpx.Response(503, text="overloaded"))
        with pytest.raises(GenerationFailureError):
            model.generate("hello")

    def test_missing_choices_raises(self) -> None:
        model = self._model(lambda request: httpx.Response(200, json={"error": "bad"}))
        with pytest.raises(GenerationFailureError):
            model.generate("hello")

    def test_no_api_key_raises_without_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        model = HFRouterChatModel(api_key="", transport=httpx.MockTransport(handler))
        with pytest.raises(GenerationFailureError):
            model.generate("hello")


class TestOpenAIChatModel:
    def test_returns_content(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="Head to higher ground."))]
        )
        model = OpenAIChatModel(model="gpt-test", client=client)
        assert model.generate("p") == "Head to higher ground."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["messages"] == [{"role": "user", "content": "p"}]

    def test_empty_choices_raises(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with pytest.raises(GenerationFailureError):
            OpenAIChatModel(client=client).generate("p")
