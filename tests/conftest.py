from types import SimpleNamespace

import pytest
from dishka import Provider, Scope, provide
from fastapi.testclient import TestClient

from support_chat.config.settings import TestingConfig
from support_chat.fastapi_app import create_fastapi_app
from support_chat.infrastructure.persistence import InMemoryStore
from support_chat.services.reply_generator import ReplyGenerator
from support_chat.setup.ioc.container import InMemoryStorageProvider, create_container


class KeyedTestingConfig(TestingConfig):
    """Testing config with a provider credential, so the real client path runs."""

    LLM_API_KEY = "test-key"


class FakeCompletions:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


class FakeLLMClient:
    """Stands in for AsyncOpenAI: `client.chat.completions.create(...)`."""

    def __init__(self, result=None, error=None):
        self.completions = FakeCompletions(result=result, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


def completion(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def generator_with(client, config=KeyedTestingConfig) -> ReplyGenerator:
    return ReplyGenerator(config=config, client_factory=lambda *args, **kwargs: client)


class ReplyGeneratorOverride(Provider):
    def __init__(self, generator: ReplyGenerator):
        super().__init__()
        self._generator = generator

    @provide(scope=Scope.APP)
    def get_reply_generator(self) -> ReplyGenerator:
        return self._generator


def build_app(config=TestingConfig, store=None, generator=None):
    providers = [InMemoryStorageProvider(store or InMemoryStore())]
    if generator is not None:
        providers.append(ReplyGeneratorOverride(generator))
    container = create_container(config, *providers)
    return create_fastapi_app(config, container=container)


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def app(store):
    """App on the in-memory store, replying through the local echo client."""
    return build_app(store=store)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client
