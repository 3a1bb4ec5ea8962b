from types import SimpleNamespace

import pytest

from smartspend.core.config import Settings
from smartspend.main import build_resolver
from smartspend.services.ai import OpenAIClassifier, build_category_list


class FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content):
    completions = FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_category_list(categories):
    assert build_category_list(categories[:2]) == "Entertainment 🎬, Food & Dining 🍔"


@pytest.mark.asyncio
async def test_classify_expense_request(categories):
    client, completions = fake_client("  Food & Dining \n")
    classifier = OpenAIClassifier(model="test-model", client=client)
    assert await classifier.classify_expense("Latte", categories) == "Food & Dining"

    req = completions.requests[0]
    assert req["model"] == "test-model"
    assert req["max_tokens"] == 50
    assert req["temperature"] == 0.1
    assert req["messages"][0]["role"] == "system"
    assert 'Expense: "Latte"' in req["messages"][1]["content"]
    assert "Travel ✈️" in req["messages"][1]["content"]


@pytest.mark.asyncio
async def test_suggest_emoji_request():
    client, completions = fake_client(None)
    classifier = OpenAIClassifier(client=client)
    assert await classifier.suggest_emoji("Pets") == ""
    assert completions.requests[0]["max_tokens"] == 10


def test_build_resolver():
    plain = build_resolver(Settings(bot_token="t", database_url="sqlite+aiosqlite://"))
    assert not plain.ai_enabled
    remote = build_resolver(Settings(bot_token="t", database_url="sqlite+aiosqlite://", openai_api_key="sk-test"))
    assert isinstance(remote.classifier, OpenAIClassifier)
