import re
import uuid

from hypothesis import given
from hypothesis import strategies as st
from sqlmodel import Session

from linkboard.bio_page.page_names import (
    BASE_NAME_MAX_LENGTH,
    allocate_page_name,
    derive_base_page_name,
    fallback_page_name,
)

_VALID = re.compile(r"^[a-z0-9_-]*$")


def test_derive_strips_dots_and_lowercases():
    assert derive_base_page_name("Alice.Smith@example.com") == "alicesmith"


def test_derive_keeps_dash_and_underscore():
    assert derive_base_page_name("first_last-2@example.com") == "first_last-2"


def test_derive_may_be_empty():
    assert derive_base_page_name("...@example.com") == ""


def test_derive_truncates_long_local_parts():
    assert derive_base_page_name("a" * 64 + "@example.com") == "a" * BASE_NAME_MAX_LENGTH


@given(st.emails())
def test_derived_names_are_always_url_safe(email: str):
    name = derive_base_page_name(email)

    assert _VALID.match(name)
    assert len(name) <= BASE_NAME_MAX_LENGTH


def test_fallback_uses_end_of_user_id():
    user_id = uuid.UUID("12345678-1234-5678-1234-567812345678")

    assert fallback_page_name(user_id) == "user12345678"


def test_allocate_returns_base_when_free(session: Session):
    assert allocate_page_name(session, "fresh@example.com", uuid.uuid4()) == "fresh"


def test_allocate_appends_counter_on_collision(session: Session, owner, make_profile):
    make_profile(owner, "olive", is_default=True)
    make_profile(owner, "olive1")

    assert allocate_page_name(session, "olive@example.com", uuid.uuid4()) == "olive2"


def test_allocate_falls_back_for_empty_base(session: Session):
    user_id = uuid.uuid4()

    name = allocate_page_name(session, "...@example.com", user_id)

    assert name == fallback_page_name(user_id)
