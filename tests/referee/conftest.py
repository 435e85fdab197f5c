import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# src/ layout: make the package importable without an editable install.
repo_root = Path(__file__).resolve().parents[2]
src_path = str(repo_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


FENCED_SINGLE_OPTION = (
    '```json\n{"options":[{"name":"A","pros":[],"cons":[],"scores":{}}]}\n```'
)


def completion_response(content):
    """Mimic the SDK's ChatCompletion shape for a single choice."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


class FakeCompletions:
    """Stand-in for `AsyncOpenAI().chat.completions` driven by a script.

    Each scripted item is either a response object or an exception to raise.
    The last item repeats once the script runs out.
    """

    def __init__(self, script):
        self._script = list(script)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        index = min(len(self.calls), len(self._script)) - 1
        outcome = self._script[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeModels:
    def __init__(self, error=None):
        self._error = error
        self.calls = 0

    async def list(self):
        self.calls += 1
        if self._error is not None:
            raise self._error
        return SimpleNamespace(data=[SimpleNamespace(id="llama-3.3-70b-versatile")])


class FakeAsyncOpenAI:
    def __init__(self, script=(), models_error=None):
        self.completions = FakeCompletions(script)
        self.chat = SimpleNamespace(completions=self.completions)
        self.models = FakeModels(models_error)
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_openai():
    """Factory: FakeAsyncOpenAI(script=[...], models_error=...)."""

    def _factory(script=(), models_error=None):
        return FakeAsyncOpenAI(script=script, models_error=models_error)

    return _factory


@pytest.fixture
def status_error():
    """Factory: a real `openai.APIStatusError` carrying the given HTTP status."""

    def _factory(status: int, message: str = "upstream said no"):
        import httpx
        import openai

        request = httpx.Request("POST", "https://api.test/v1/chat/completions")
        response = httpx.Response(
            status, request=request, json={"error": {"message": message}}
        )
        return openai.APIStatusError(message, response=response, body=None)

    return _factory


@pytest.fixture
def connection_error():
    def _factory():
        import httpx
        import openai

        request = httpx.Request("POST", "https://api.test/v1/chat/completions")
        return openai.APIConnectionError(request=request)

    return _factory


@pytest.fixture
def recorded_sleeps(monkeypatch):
    """Replace asyncio.sleep with an instant fake and record requested waits."""

    import asyncio

    waits = []

    async def _fake_sleep(delay, result=None):
        waits.append(delay)
        return result

    monkeypatch.setattr(asyncio, "sleep", _fake_sleep)
    return waits


@pytest.fixture
def completion_config():
    def _factory(**overrides):
        from referee.llm import CompletionConfig, RetryConfig

        params = dict(
            api_key="test-key",
            base_url="https://api.test/v1",
            model="test-model",
            retry=RetryConfig(max_retries=3, base_delay_s=1.0),
        )
        params.update(overrides)
        return CompletionConfig(**params)

    return _factory


@pytest.fixture
def make_response():
    return completion_response


@pytest.fixture
def fenced_single_option():
    return FENCED_SINGLE_OPTION
