"""User-facing messages for admin operations, shown as toasts."""
from dataclasses import dataclass
from urllib.parse import quote

from app.admin.client import ApiError

TRY_AGAIN = "Please try again."
CATEGORY_IN_USE = "Cannot delete a category that still has products."


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: str = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


def success(title: str, description: str) -> Toast:
    return Toast(title=title, description=description)


def failure(title: str, description: str = TRY_AGAIN) -> Toast:
    return Toast(title=title, description=description, variant="destructive")


def category_delete_failure(exc: Exception) -> Toast:
    # the API names the one case users can act on
    if isinstance(exc, ApiError) and "existing products" in exc.message:
        return failure("Could not remove category", CATEGORY_IN_USE)
    return failure("Could not remove category", "Error removing category. " + TRY_AGAIN)


def whatsapp_link(phone: str, order_number: str) -> str:
    """wa.me link that opens a chat with the customer about their order."""
    digits = "".join(ch for ch in phone if ch.isdigit())
    message = f"Hello! Your order #{order_number} was updated. Contact us for more information."
    return f"https://wa.me/{digits}?text={quote(message)}"
