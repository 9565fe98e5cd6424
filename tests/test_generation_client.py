from types import SimpleNamespace

import pytest

from services.openai.generation_client import WEB_SEARCH_TOOL, GenerationClient


class FakeResponses:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return self.response


def make_response(text, input_tokens=12, output_tokens=34):
    return SimpleNamespace(
        output=[
            SimpleNamespace(type="reasoning", content=[]),
            SimpleNamespace(type="message", content=[{"type": "output_text", "text": text}]),
        ],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def make_client(**kwargs):
    responses = FakeResponses(**kwargs)
    return GenerationClient(SimpleNamespace(responses=responses), model="test-model"), responses


async def test_invoke_returns_text_and_usage():
    client, responses = make_client(response=make_response("  Hello there.  "))

    result = await client.invoke("Say hello")

    assert result.ok
    assert result.text == "Hello there."
    assert result.usage == {"input_tokens": 12, "output_tokens": 34}
    assert len(responses.calls) == 1
    request = responses.calls[0]
    assert request["model"] == "test-model"
    assert request["input"][0]["content"][0]["text"] == "Say hello"
    assert "tools" not in request


async def test_internet_context_attaches_web_search():
    client, responses = make_client(response=make_response("ok"))

    await client.invoke("What's trending?", allow_internet_context=True)

    assert responses.calls[0]["tools"] == [WEB_SEARCH_TOOL]


async def test_service_error_becomes_failure_without_retry():
    client, responses = make_client(exc=ConnectionError("reset by peer"))

    result = await client.invoke("Hi")

    assert not result.ok
    assert "reset by peer" in result.error
    assert len(responses.calls) == 1


@pytest.mark.parametrize(
    "response",
    [
        make_response("   "),
        SimpleNamespace(output=[], output_text=""),
        SimpleNamespace(output=None),
    ],
)
async def test_empty_output_becomes_failure(response):
    client, _ = make_client(response=response)

    result = await client.invoke("Hi")

    assert not result.ok
    assert result.text == ""


async def test_output_text_fallback_is_used():
    client, _ = make_client(response=SimpleNamespace(output=[], output_text="From shortcut"))

    result = await client.invoke("Hi")

    assert result.ok
    assert result.text == "From shortcut"


async def test_blank_prompt_is_a_programming_error():
    client, responses = make_client(response=make_response("unused"))

    with pytest.raises(ValueError):
        await client.invoke("   ")
    assert responses.calls == []


def test_client_is_required():
    with pytest.raises(ValueError):
        GenerationClient(None)


def test_model_is_read_from_environment_at_construction(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "my-model-from-dotenv")
    client = GenerationClient(SimpleNamespace(responses=FakeResponses()))
    assert client.model == "my-model-from-dotenv"

    monkeypatch.delenv("OPENAI_MODEL")
    assert GenerationClient(SimpleNamespace(responses=FakeResponses())).model == "gpt-5"
