import pytest

from app.admin.gallery import (
    DuplicateImage,
    GalleryImage,
    InvalidImageUrl,
    add_image,
    main_image,
    move_image,
    remove_image,
    set_main_image,
)

A = "https://cdn.example.com/a.jpg"
B = "https://cdn.example.com/b.jpg"
C = "https://cdn.example.com/c.jpg"
D = "https://cdn.example.com/d.jpg"


def build(*urls):
    images = ()
    for url in urls:
        images = add_image(images, url)
    return images


def orders(images):
    return [img.display_order for img in images]


def mains(images):
    return [img.image_url for img in images if img.is_main]


def test_first_added_image_becomes_main():
    images = add_image((), A)
    assert images == (GalleryImage(image_url=A, display_order=0, is_main=True),)


def test_add_appends_with_display_order_equal_to_position():
    images = build(A, B, C)
    assert [img.image_url for img in images] == [A, B, C]
    assert orders(images) == [0, 1, 2]
    assert mains(images) == [A]


def test_add_strips_whitespace_and_keeps_alt_text():
    images = add_image((), f"  {A} ", alt_text="front")
    assert images[0].image_url == A
    assert images[0].alt_text == "front"


def test_duplicate_url_is_rejected_and_length_unchanged():
    images = build(A, B)
    with pytest.raises(DuplicateImage):
        add_image(images, B)
    assert len(images) == 2


@pytest.mark.parametrize("url", ["", "   ", "not a url", "ftp://cdn.example.com/a.jpg", "/relative/a.jpg"])
def test_empty_or_invalid_url_is_rejected(url):
    with pytest.raises(InvalidImageUrl):
        add_image((), url)


def test_remove_closes_the_gap_in_display_order():
    images = remove_image(build(A, B, C, D), 1)
    assert [img.image_url for img in images] == [A, C, D]
    assert orders(images) == [0, 1, 2]


def test_removing_main_promotes_new_first_entry():
    images = set_main_image(build(A, B, C), 0)
    images = remove_image(images, 0)
    assert mains(images) == [B]
    assert images[0].is_main


def test_removing_main_from_the_middle_promotes_first_entry():
    images = set_main_image(build(A, B, C), 1)
    images = remove_image(images, 1)
    assert mains(images) == [A]


def test_removing_non_main_keeps_main():
    images = set_main_image(build(A, B, C), 2)
    images = remove_image(images, 0)
    assert mains(images) == [C]


def test_removing_last_image_leaves_empty_gallery():
    assert remove_image(build(A), 0) == ()


def test_display_orders_match_positions_after_mixed_add_and_remove():
    images = build(A, B, C)
    images = remove_image(images, 2)
    images = add_image(images, D)
    images = remove_image(images, 0)
    images = add_image(images, A)
    assert orders(images) == list(range(len(images)))
    assert len(mains(images)) == 1


def test_set_main_flags_exactly_one_image():
    images = set_main_image(build(A, B, C), 2)
    assert mains(images) == [C]
    assert main_image(images).image_url == C


def test_move_reorders_and_renumbers():
    images = move_image(build(A, B, C, D), 0, 2)
    assert [img.image_url for img in images] == [B, C, A, D]
    assert orders(images) == [0, 1, 2, 3]


def test_move_keeps_main_flag_on_the_same_image():
    images = set_main_image(build(A, B, C), 1)
    images = move_image(images, 1, 0)
    assert mains(images) == [B]
    images = move_image(images, 0, 2)
    assert mains(images) == [B]
    assert images[2].image_url == B


def test_move_does_not_touch_main_when_first_entry_changes():
    images = move_image(build(A, B, C), 2, 0)
    # A stays main although C is now first
    assert mains(images) == [A]
    assert images[0].image_url == C


@pytest.mark.parametrize("op,args", [
    (remove_image, (3,)),
    (set_main_image, (-1,)),
    (move_image, (0, 5)),
    (move_image, (7, 0)),
])
def test_out_of_range_indexes_raise(op, args):
    with pytest.raises(IndexError):
        op(build(A, B, C), *args)


def test_operations_do_not_mutate_input():
    images = build(A, B, C)
    snapshot = tuple(images)
    remove_image(images, 0)
    set_main_image(images, 2)
    move_image(images, 0, 2)
    add_image(images, D)
    assert images == snapshot
