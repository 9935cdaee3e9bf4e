import pytest
from pydantic import ValidationError

from giftdesk.attribution.domain import Age, GiftId, ResidentId
from giftdesk.shared.domain.pagination import (
    PaginatedResult,
    Page,
    PerPage,
    SearchTerm,
    Total,
)
from giftdesk.shared.domain.value_objects import Email


def test_scalar_and_keyword_construction_are_equivalent() -> None:
    assert Age(30) == Age(value=30) == Age.model_validate(30)
    assert hash(Age(30)) == hash(Age(value=30))
    assert str(Age(30)) == "30"


def test_value_objects_are_immutable() -> None:
    age = Age(30)
    with pytest.raises(ValidationError):
        age.value = 31  # type: ignore[misc]


def test_different_value_object_types_are_never_equal() -> None:
    uid = "11111111-1111-4111-8111-111111111111"
    assert ResidentId(uid) != GiftId(uid)


@pytest.mark.parametrize(
    ("age", "child", "adult", "senior"),
    [(0, True, False, False), (17, True, False, False), (18, False, True, False),
     (64, False, True, False), (65, False, True, True), (150, False, True, True)],
)
def test_age_categories(age: int, child: bool, adult: bool, senior: bool) -> None:
    value = Age(age)
    assert (value.is_child, value.is_adult, value.is_senior) == (child, adult, senior)


@pytest.mark.parametrize(
    ("age", "message"),
    [(-1, "Age cannot be negative"), (151, "Age cannot exceed 150 years")],
)
def test_age_out_of_range(age: int, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        Age(age)


def test_email_is_normalised() -> None:
    email = Email("  Alice.Martin@Example.COM ")

    assert email.value == "alice.martin@example.com"
    assert email.local_part == "alice.martin"
    assert email.domain == "example.com"


@pytest.mark.parametrize(
    ("raw", "message"),
    [("", "Email cannot be empty"), ("not-an-email", "Invalid email format")],
)
def test_invalid_email(raw: str, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        Email(raw)


def test_uuid_identifier_is_lower_cased() -> None:
    raw = "AAAAAAAA-AAAA-4AAA-8AAA-AAAAAAAAAAAA"
    assert GiftId(raw).value == raw.lower()


def test_uuid_identifier_rejects_garbage() -> None:
    with pytest.raises(ValidationError, match="Invalid ResidentId format"):
        ResidentId("resident-42")


def test_page_offset() -> None:
    assert Page(3).offset(PerPage(20)) == 40
    assert Page().offset(PerPage()) == 0


@pytest.mark.parametrize(
    ("factory", "value", "message"),
    [
        (Page, 0, "Page must be greater than or equal to 1"),
        (PerPage, 0, "PerPage must be greater than or equal to 1"),
        (PerPage, 101, "PerPage cannot exceed 100"),
        (Total, -1, "Total cannot be negative"),
        (SearchTerm, "a", "at least 2 characters"),
    ],
)
def test_pagination_bounds(factory: type, value: object, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        factory(value)


def test_search_term_matching() -> None:
    term = SearchTerm("  mar ")

    assert term.value == "mar"
    assert term.matches("Alice", "Martin")
    assert not term.matches("Bob", "Durand")
    assert SearchTerm().matches("anything")
    assert SearchTerm().is_empty


def test_paginated_result_arithmetic() -> None:
    result = PaginatedResult(
        items=[1, 2, 3], page=Page(2), per_page=PerPage(3), total=Total(7)
    )

    assert result.total_pages == 3
    assert result.has_next_page
    assert result.has_previous_page

    doubled = result.map(lambda n: n * 2)
    assert doubled.items == [2, 4, 6]
    assert doubled.total == Total(7)


def test_empty_result_has_a_single_page() -> None:
    result: PaginatedResult[int] = PaginatedResult(
        items=[], page=Page(1), per_page=PerPage(10), total=Total(0)
    )

    assert result.total_pages == 1
    assert not result.has_next_page
    assert not result.has_previous_page
