"""
Ordered product gallery kept as an immutable tuple of GalleryImage.

Every operation returns a new tuple. Display orders always equal the
positions 0..n-1 and the main flag travels with its image when the
gallery is reordered.
"""
from dataclasses import dataclass, replace

from pydantic import HttpUrl, TypeAdapter, ValidationError

_url_adapter = TypeAdapter(HttpUrl)


class ImageRejected(ValueError):
    """An image could not be added to the gallery."""


class InvalidImageUrl(ImageRejected):
    pass


class DuplicateImage(ImageRejected):
    pass


@dataclass(frozen=True)
class GalleryImage:
    image_url: str
    display_order: int = 0
    is_main: bool = False
    alt_text: str = ""
    id: int | None = None


Gallery = tuple[GalleryImage, ...]


def _renumber(images) -> Gallery:
    return tuple(
        img if img.display_order == position else replace(img, display_order=position)
        for position, img in enumerate(images)
    )


def _check_index(images: Gallery, index: int) -> None:
    if not 0 <= index < len(images):
        raise IndexError(f"image index {index} out of range for {len(images)} image(s)")


def validate_url(url: str) -> str:
    clean = (url or "").strip()
    if not clean:
        raise InvalidImageUrl("Image URL is empty")
    try:
        _url_adapter.validate_python(clean)
    except ValidationError:
        raise InvalidImageUrl(f"Invalid image URL: {clean}") from None
    return clean


def main_image(images: Gallery) -> GalleryImage | None:
    return next((img for img in images if img.is_main), None)


def add_image(images: Gallery, url: str, alt_text: str = "") -> Gallery:
    clean = validate_url(url)
    if any(img.image_url == clean for img in images):
        raise DuplicateImage(f"Image already in gallery: {clean}")

    new = GalleryImage(
        image_url=clean,
        display_order=len(images),
        is_main=not images,
        alt_text=alt_text,
    )
    return images + (new,)


def remove_image(images: Gallery, index: int) -> Gallery:
    _check_index(images, index)
    removed = images[index]
    remaining = _renumber(images[:index] + images[index + 1:])

    if removed.is_main and remaining:
        remaining = (replace(remaining[0], is_main=True),) + tuple(
            replace(img, is_main=False) if img.is_main else img for img in remaining[1:]
        )
    return remaining


def set_main_image(images: Gallery, index: int) -> Gallery:
    _check_index(images, index)
    return tuple(
        img if img.is_main == (position == index) else replace(img, is_main=position == index)
        for position, img in enumerate(images)
    )


def move_image(images: Gallery, from_index: int, to_index: int) -> Gallery:
    _check_index(images, from_index)
    _check_index(images, to_index)
    items = list(images)
    items.insert(to_index, items.pop(from_index))
    return _renumber(items)
