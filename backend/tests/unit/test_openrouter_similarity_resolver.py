"""Unit tests for OpenRouterSimilarityResolver."""

import pytest

from pingspot.application.interfaces import ChatProvider
from pingspot.domain.entities import ChatCompletionResult
from pingspot.domain.exceptions import ChatProviderError
from pingspot.infrastructure.similarity import OpenRouterSimilarityResolver


class FakeChatProvider(ChatProvider):
    def __init__(self, reply: str = "NO", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.requests = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def complete(self, messages, model, *, temperature=None, max_tokens=None):
        self.requests.append((messages, model, temperature))
        if self.error is not None:
            raise self.error
        return ChatCompletionResult(model=model, content=self.reply, finish_reason="stop")


@pytest.mark.asyncio
async def test_returns_existing_name_chosen_by_model():
    provider = FakeChatProvider(reply=" Basketball\n")
    resolver = OpenRouterSimilarityResolver(provider, model="openai/gpt-4o-mini")

    match = await resolver.find_duplicate("Hoops", ["Chess", "Basketball"])

    assert match == "Basketball"
    messages, model, temperature = provider.requests[0]
    assert model == "openai/gpt-4o-mini"
    assert temperature == 0.0
    assert "Hoops" in messages[-1].content
    assert "- Basketball" in messages[-1].content


@pytest.mark.asyncio
async def test_no_answer_means_no_duplicate():
    resolver = OpenRouterSimilarityResolver(FakeChatProvider(reply="NO"), model="m")
    assert await resolver.find_duplicate("Chess", ["Basketball"]) is None


@pytest.mark.asyncio
async def test_answer_outside_the_list_is_ignored():
    resolver = OpenRouterSimilarityResolver(FakeChatProvider(reply="Ball games"), model="m")
    assert await resolver.find_duplicate("Hoops", ["Basketball"]) is None


@pytest.mark.asyncio
async def test_provider_error_means_no_duplicate():
    provider = FakeChatProvider(error=ChatProviderError("openrouter", 500, "down"))
    resolver = OpenRouterSimilarityResolver(provider, model="m")
    assert await resolver.find_duplicate("Hoops", ["Basketball"]) is None


@pytest.mark.asyncio
async def test_empty_list_skips_the_model():
    provider = FakeChatProvider(reply="Basketball")
    resolver = OpenRouterSimilarityResolver(provider, model="m")
    assert await resolver.find_duplicate("Hoops", []) is None
    assert provider.requests == []
