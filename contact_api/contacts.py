"""Contact management routes for the Contact Management API."""

import math

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import schemas, crud
from .database import get_db
from .auth import get_current_user
from .models import User

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


@router.post("", response_model=schemas.WebResponse[schemas.ContactResponse])
def create_contact(
    contact_in: schemas.ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new contact owned by the current user.

    Args:
        contact_in (ContactCreate): Contact input data.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        dict: Envelope with the created contact.
    """
    contact = crud.create_contact(db, contact_in, current_user)
    return {"data": schemas.ContactResponse.model_validate(contact)}


@router.get("", response_model=schemas.PageResponse[schemas.ContactResponse])
def search_contacts(
    name: str | None = Query(None),
    email: str | None = Query(None),
    phone: str | None = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(
        schemas.DEFAULT_PAGE_SIZE, ge=1, le=schemas.MAX_PAGE_SIZE
    ),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve a page of contacts belonging to the current user.

    Supports optional substring search by name (first or last), email
    and phone.

    Args:
        name (str | None): Substring of the first or last name.
        email (str | None): Substring of the email address.
        phone (str | None): Substring of the phone number.
        page (int): 1-based page number.
        size (int): Page size.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        dict: Envelope with the page of contacts and paging metadata.
    """
    search = schemas.ContactSearch(
        name=name, email=email, phone=phone, page=page, size=size
    )
    contacts, total = crud.search_contacts(db, current_user, search)
    return {
        "data": [schemas.ContactResponse.model_validate(c) for c in contacts],
        "paging": schemas.Paging(
            size=search.size,
            total_page=math.ceil(total / search.size),
            current_page=search.page,
        ),
    }


@router.get("/{contact_id}", response_model=schemas.WebResponse[schemas.ContactResponse])
def get_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve a single contact by ID for the current user.

    Args:
        contact_id (int): Contact identifier.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        HTTPException: If contact is not found.

    Returns:
        dict: Envelope with the contact.
    """
    c = crud.get_contact_or_404(db, contact_id, current_user)
    return {"data": schemas.ContactResponse.model_validate(c)}


@router.put("/{contact_id}", response_model=schemas.WebResponse[schemas.ContactResponse])
def update_contact(
    contact_id: int,
    changes: schemas.ContactUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an existing contact.

    Only fields provided in the request will be updated.

    Args:
        contact_id (int): Contact identifier.
        changes (ContactUpdate): Fields to update.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        HTTPException: If contact is not found.

    Returns:
        dict: Envelope with the updated contact.
    """
    c = crud.get_contact_or_404(db, contact_id, current_user)
    c = crud.update_contact(db, c, changes.model_dump(exclude_unset=True))
    return {"data": schemas.ContactResponse.model_validate(c)}


@router.delete("/{contact_id}", response_model=schemas.WebResponse[str])
def remove_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a contact owned by the current user.

    Args:
        contact_id (int): Contact identifier.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        HTTPException: If contact is not found.

    Returns:
        dict: Deletion status.
    """
    c = crud.get_contact_or_404(db, contact_id, current_user)
    crud.delete_contact(db, c)
    return {"data": "OK"}
