import pytest
from fastapi import HTTPException

from contact_api import crud, models
from contact_api.schemas import AddressCreate, ContactCreate, ContactSearch, UserCreate


def add_contacts(db_session, user, count):
    for i in range(count):
        crud.create_contact(
            db_session,
            ContactCreate(
                first_name=f"first{i}",
                last_name="Smith" if i % 2 else "Jones",
                email=f"person{i}@example.com",
                phone=f"0800{i}",
            ),
            user,
        )


def test_search_contacts_windows_results(db_session, user):
    add_contacts(db_session, user, 5)

    page, total = crud.search_contacts(db_session, user, ContactSearch(page=2, size=2))

    assert total == 5
    assert [c.first_name for c in page] == ["first2", "first3"]


def test_search_contacts_combines_filters(db_session, user):
    add_contacts(db_session, user, 5)

    page, total = crud.search_contacts(
        db_session, user, ContactSearch(name="Smith", phone="08003")
    )

    assert total == 1
    assert page[0].first_name == "first3"


def test_search_contacts_escapes_wildcards(db_session, user):
    add_contacts(db_session, user, 2)

    page, total = crud.search_contacts(db_session, user, ContactSearch(email="%"))

    assert total == 0
    assert page == []


def test_search_contacts_only_returns_own_contacts(db_session, user):
    other = models.User(username="other", password="x", name="other")
    db_session.add(other)
    db_session.commit()
    add_contacts(db_session, other, 3)

    page, total = crud.search_contacts(db_session, user, ContactSearch())

    assert total == 0
    assert page == []


def test_get_contact_or_404(db_session, user):
    with pytest.raises(HTTPException) as exc_info:
        crud.get_contact_or_404(db_session, 1, user)
    assert exc_info.value.status_code == 404


def test_address_lookup_is_scoped_to_contact(db_session, user):
    add_contacts(db_session, user, 2)
    first, second = crud.search_contacts(db_session, user, ContactSearch())[0]
    address = crud.create_address(
        db_session, first, AddressCreate(country="Indonesia", postal_code="14045")
    )

    assert crud.get_address(db_session, first, address.id) is not None
    assert crud.get_address(db_session, second, address.id) is None
    with pytest.raises(HTTPException) as exc_info:
        crud.get_address_or_404(db_session, second, address.id)
    assert exc_info.value.status_code == 404
    assert crud.list_addresses(db_session, first) == [address]


def test_create_user_reports_duplicate_insert(db_session, user, monkeypatch):
    # existence check misses a row inserted by a concurrent registration
    monkeypatch.setattr(crud, "get_user_by_username", lambda db, username: None)
    db_session.expunge_all()

    with pytest.raises(HTTPException) as exc_info:
        crud.create_user(
            db_session,
            UserCreate(username="test", password="test", name="dup"),
            "hashed",
        )
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Username already exists"
    assert db_session.get(models.User, "test").name == "test"
