from openai import OpenAI

from app.core.config import settings

_client: OpenAI | None = None


def get_client() -> OpenAI:
    """Shared OpenAI client for catalog copy generation (image alt texts)."""
    global _client
    if not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is not configured; alt texts use the fallback")
    if _client is None:
        _client = OpenAI(api_key=settings.OPENAI_API_KEY, timeout=10.0)
    return _client
