import logging

from app.core.config import settings
from app.services.llm import get_client

logger = logging.getLogger(__name__)

MAX_ALT_TEXT = 125

SYSTEM = """You write alt texts for product photos in an online store.
Rules (strict):
- One short descriptive sentence, no quotes, no emojis.
- Always include the product name.
- Never exceed 125 characters.
"""


def fallback_alt_text(product_name: str, position: int) -> str:
    return f"{product_name} - image {position}"


def _clip(text_value: str) -> str:
    text_value = " ".join(text_value.split()).strip('"')
    if len(text_value) > MAX_ALT_TEXT:
        return text_value[: MAX_ALT_TEXT - 3] + "..."
    return text_value


def generate_alt_text(product_name: str, category_name: str | None, position: int) -> str:
    """
    Alt text for the image at 1-based `position` of a product gallery.
    Uses OpenAI when a key is configured; otherwise a deterministic fallback.
    """
    fallback = fallback_alt_text(product_name, position)
    if not settings.OPENAI_API_KEY:
        return fallback

    try:
        client = get_client()
        resp = client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            temperature=0.3,
            max_tokens=60,
            messages=[
                {"role": "system", "content": SYSTEM},
                {
                    "role": "user",
                    "content": (
                        f"Product: {product_name}\n"
                        f"Category: {category_name or 'general'}\n"
                        f"Image number: {position}"
                    ),
                },
            ],
        )
        content = _clip(resp.choices[0].message.content or "")
        return content or fallback
    except Exception as e:
        logger.warning("alt text generation failed for %r: %s", product_name, e)
        return fallback
