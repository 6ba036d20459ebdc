"""CRUD operations for users, contacts and addresses.

This module contains database interaction logic for the three
entities, isolated from FastAPI route handlers.
"""

import logging

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from . import models, schemas

logger = logging.getLogger(__name__)

# Range of a signed 64-bit INTEGER column
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def _fits_id(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


def create_user(
    db: Session, user_in: schemas.UserCreate, hashed_password: str
) -> models.User:
    """
    Create and persist a new user.

    Args:
        db (Session): SQLAlchemy database session.
        user_in (UserCreate): Incoming user data.
        hashed_password (str): Securely hashed password.

    Raises:
        HTTPException: If the username is already taken.

    Returns:
        User: Newly created user instance.
    """
    if get_user_by_username(db, user_in.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )

    user = models.User(
        username=user_in.username,
        password=hashed_password,
        name=user_in.name,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )
    db.refresh(user)
    logger.info("Registered user %s", user.username)
    return user


def get_user_by_username(db: Session, username: str) -> models.User | None:
    """
    Retrieve a user by username.

    Args:
        db (Session): Database session.
        username (str): Username.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.get(models.User, username)


def get_user_by_token(db: Session, token: str) -> models.User | None:
    """
    Retrieve the user currently holding the given API token.

    Args:
        db (Session): Database session.
        token (str): Value of the ``X-API-TOKEN`` header.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.execute(
        select(models.User).where(models.User.token == token)
    ).scalars().first()


def update_user(db: Session, user: models.User, changes: dict) -> models.User:
    """
    Update mutable fields of a user.

    Args:
        db (Session): Database session.
        user (User): Target user.
        changes (dict): Fields to update; ``password`` must already be hashed.

    Returns:
        User: Updated user instance.
    """
    for key, value in changes.items():
        setattr(user, key, value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_user_token(
    db: Session, user: models.User, token: str | None
) -> models.User:
    """Store a new API token for the user, or clear it with ``None``."""
    user.token = token
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_contact(
    db: Session, contact_in: schemas.ContactCreate, user: models.User
) -> models.Contact:
    """
    Create a new contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_in (ContactCreate): Contact data.
        user (User): Owner of the contact.

    Returns:
        Contact: Newly created contact.
    """
    contact = models.Contact(**contact_in.model_dump(), username=user.username)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("User %s created contact %s", user.username, contact.id)
    return contact


def get_contact(db: Session, contact_id: int, user: models.User):
    """
    Retrieve a single contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_id (int): Contact identifier.
        user (User): Contact owner.

    Returns:
        Contact | None: Contact if found, otherwise ``None``.
    """
    if not _fits_id(contact_id):
        return None
    return db.execute(
        select(models.Contact).where(
            models.Contact.id == contact_id,
            models.Contact.username == user.username,
        )
    ).scalar_one_or_none()


def get_contact_or_404(
    db: Session, contact_id: int, user: models.User
) -> models.Contact:
    """
    Retrieve a contact owned by the user or fail.

    Contacts of other users are reported exactly like missing ones.

    Raises:
        HTTPException: 404 if no such contact belongs to the user.
    """
    contact = get_contact(db, contact_id, user)
    if not contact:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found"
        )
    return contact


def search_contacts(
    db: Session, user: models.User, search: schemas.ContactSearch
) -> tuple[list[models.Contact], int]:
    """
    Retrieve one page of the user's contacts matching the search filters.

    ``name`` matches either first or last name; ``email`` and ``phone``
    match their own column. All filters are substring matches and are
    combined with AND.

    Args:
        db (Session): Database session.
        user (User): Contact owner.
        search (ContactSearch): Filters and page window.

    Returns:
        tuple[list[Contact], int]: Contacts on the requested page and the
        total number of matching contacts.
    """
    filters = [models.Contact.username == user.username]
    if search.name:
        filters.append(
            or_(
                models.Contact.first_name.contains(search.name, autoescape=True),
                models.Contact.last_name.contains(search.name, autoescape=True),
            )
        )
    if search.email:
        filters.append(models.Contact.email.contains(search.email, autoescape=True))
    if search.phone:
        filters.append(models.Contact.phone.contains(search.phone, autoescape=True))

    total = db.scalar(
        select(func.count()).select_from(models.Contact).where(*filters)
    ) or 0

    # pages past the last row are empty; the offset may not fit an INTEGER
    offset = (search.page - 1) * search.size
    if offset >= total:
        return [], total

    stmt = (
        select(models.Contact)
        .where(*filters)
        .order_by(models.Contact.id)
        .offset(offset)
        .limit(search.size)
    )
    return list(db.scalars(stmt).all()), total


def update_contact(db: Session, contact: models.Contact, changes: dict):
    """
    Update mutable fields of a contact.

    Args:
        db (Session): Database session.
        contact (Contact): Contact instance.
        changes (dict): Fields to update.

    Returns:
        Contact: Updated contact.
    """
    for key, value in changes.items():
        setattr(contact, key, value)

    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact: models.Contact):
    """
    Delete a contact, together with its addresses, from the database.

    Args:
        db (Session): Database session.
        contact (Contact): Contact to delete.
    """
    logger.info("Deleting contact %s", contact.id)
    db.delete(contact)
    db.commit()
    return None


def create_address(
    db: Session, contact: models.Contact, address_in: schemas.AddressCreate
) -> models.Address:
    """
    Create a new address for the given contact.

    Args:
        db (Session): Database session.
        contact (Contact): Contact the address belongs to.
        address_in (AddressCreate): Address data.

    Returns:
        Address: Newly created address.
    """
    address = models.Address(**address_in.model_dump(), contact_id=contact.id)
    db.add(address)
    db.commit()
    db.refresh(address)
    logger.info("Contact %s received address %s", contact.id, address.id)
    return address


def get_address(db: Session, contact: models.Contact, address_id: int):
    """
    Retrieve a single address of the given contact.

    Returns:
        Address | None: Address if found, otherwise ``None``.
    """
    if not _fits_id(address_id):
        return None
    return db.execute(
        select(models.Address).where(
            models.Address.id == address_id,
            models.Address.contact_id == contact.id,
        )
    ).scalar_one_or_none()


def get_address_or_404(
    db: Session, contact: models.Contact, address_id: int
) -> models.Address:
    """
    Retrieve an address of the contact or fail.

    Raises:
        HTTPException: 404 if the contact has no such address.
    """
    address = get_address(db, contact, address_id)
    if not address:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Address not found"
        )
    return address


def list_addresses(db: Session, contact: models.Contact) -> list[models.Address]:
    """Return every address of the contact ordered by id."""
    return list(
        db.scalars(
            select(models.Address)
            .where(models.Address.contact_id == contact.id)
            .order_by(models.Address.id)
        ).all()
    )


def update_address(db: Session, address: models.Address, changes: dict):
    """
    Update mutable fields of an address.

    Args:
        db (Session): Database session.
        address (Address): Address instance.
        changes (dict): Fields to update.

    Returns:
        Address: Updated address.
    """
    for key, value in changes.items():
        setattr(address, key, value)

    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def delete_address(db: Session, address: models.Address):
    """Delete an address from the database."""
    logger.info("Deleting address %s", address.id)
    db.delete(address)
    db.commit()
    return None
