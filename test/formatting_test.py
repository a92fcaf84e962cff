import pytest

from post_notifications.app.notifications.formatting import (
    comment_preview,
    delivery_token,
    display_name,
    display_title,
    to_target_owner,
)
from post_notifications.app.notifications.schemas import PostRecord, UserRecord


@pytest.mark.parametrize("firstname, lastname, expected", [
    ("", "", "Someone"),
    (None, None, "Someone"),
    ("Ann", "", "Ann"),
    ("", "Lee", "Lee"),
    ("Ann", "Lee", "Ann Lee"),
    ("  ", " ", "Someone"),
])
def test_display_name(firstname, lastname, expected):
    user = UserRecord(id="u1", firstname=firstname, lastname=lastname)
    assert display_name(user) == expected


def test_display_title_prefers_title():
    post = PostRecord(id="p1", title="Hi", plainText="ignored body")
    assert display_title(post) == "Hi"


def test_display_title_falls_back_to_plain_text():
    text = "x" * 30 + "y" * 50
    post = PostRecord(id="p1", plainText=text)
    assert display_title(post) == text[:50]
    assert len(display_title(post)) == 50


def test_display_title_placeholder():
    assert display_title(PostRecord(id="p1")) == "your post"
    assert display_title(PostRecord(id="p1", title="", plainText="")) == "your post"


def test_comment_preview_truncates_long_text():
    text = "a" * 150
    assert comment_preview(text) == "a" * 100 + "..."


def test_comment_preview_keeps_short_text():
    text = "b" * 50
    assert comment_preview(text) == text
    assert comment_preview("c" * 100) == "c" * 100


def test_comment_preview_missing_text():
    assert comment_preview(None) == ""


def test_delivery_token_treats_empty_as_missing():
    assert delivery_token(UserRecord(id="u1", fcmToken="")) is None
    assert delivery_token(UserRecord(id="u1")) is None
    assert to_target_owner(UserRecord(id="u1", fcmToken="tok")).deliveryToken == "tok"
