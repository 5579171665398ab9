from types import SimpleNamespace

from app.core import config
from app.services import alt_text


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(monkeypatch, completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(config.settings, "OPENAI_API_KEY", "sk-test", raising=False)
    monkeypatch.setattr(alt_text, "get_client", lambda: client)


def test_fallback_without_api_key(monkeypatch):
    monkeypatch.setattr(config.settings, "OPENAI_API_KEY", "", raising=False)
    assert alt_text.generate_alt_text("iPhone 15", "Smartphones", 2) == "iPhone 15 - image 2"


def test_uses_model_answer(monkeypatch):
    completions = FakeCompletions(content='"iPhone 15 in blue, front view"')
    fake_openai(monkeypatch, completions)

    assert alt_text.generate_alt_text("iPhone 15", "Smartphones", 1) == "iPhone 15 in blue, front view"
    assert "Category: Smartphones" in completions.calls[0]["messages"][1]["content"]


def test_long_answers_are_clipped(monkeypatch):
    fake_openai(monkeypatch, FakeCompletions(content="word " * 60))

    text = alt_text.generate_alt_text("iPhone 15", None, 1)

    assert len(text) == alt_text.MAX_ALT_TEXT
    assert text.endswith("...")


def test_model_errors_fall_back(monkeypatch):
    fake_openai(monkeypatch, FakeCompletions(error=RuntimeError("rate limited")))
    assert alt_text.generate_alt_text("iPhone 15", None, 3) == "iPhone 15 - image 3"


def test_empty_answer_falls_back(monkeypatch):
    fake_openai(monkeypatch, FakeCompletions(content="   "))
    assert alt_text.generate_alt_text("iPhone 15", None, 1) == "iPhone 15 - image 1"
