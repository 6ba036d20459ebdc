"""Address routes, nested under the contact they belong to."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from . import schemas, crud
from .database import get_db
from .auth import get_current_user
from .models import User

router = APIRouter(prefix="/api/contacts/{contact_id}/addresses", tags=["addresses"])


@router.post("", response_model=schemas.WebResponse[schemas.AddressResponse])
def create_address(
    contact_id: int,
    address_in: schemas.AddressCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add an address to one of the current user's contacts.

    Raises:
        HTTPException: If the contact is not found.
    """
    contact = crud.get_contact_or_404(db, contact_id, current_user)
    address = crud.create_address(db, contact, address_in)
    return {"data": schemas.AddressResponse.model_validate(address)}


@router.get("", response_model=schemas.WebResponse[List[schemas.AddressResponse]])
def list_addresses(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List every address of a contact."""
    contact = crud.get_contact_or_404(db, contact_id, current_user)
    addresses = crud.list_addresses(db, contact)
    return {"data": [schemas.AddressResponse.model_validate(a) for a in addresses]}


@router.get(
    "/{address_id}", response_model=schemas.WebResponse[schemas.AddressResponse]
)
def get_address(
    contact_id: int,
    address_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve a single address of a contact.

    Raises:
        HTTPException: If the contact or the address is not found.
    """
    contact = crud.get_contact_or_404(db, contact_id, current_user)
    address = crud.get_address_or_404(db, contact, address_id)
    return {"data": schemas.AddressResponse.model_validate(address)}


@router.put(
    "/{address_id}", response_model=schemas.WebResponse[schemas.AddressResponse]
)
def update_address(
    contact_id: int,
    address_id: int,
    changes: schemas.AddressUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an address of a contact.

    Only fields provided in the request will be updated.

    Args:
        contact_id (int): Contact identifier.
        address_id (int): Address identifier.
        changes (AddressUpdate): Fields to update.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        HTTPException: If the contact or the address is not found.

    Returns:
        dict: Envelope with the updated address.
    """
    contact = crud.get_contact_or_404(db, contact_id, current_user)
    address = crud.get_address_or_404(db, contact, address_id)
    address = crud.update_address(db, address, changes.model_dump(exclude_unset=True))
    return {"data": schemas.AddressResponse.model_validate(address)}


@router.delete("/{address_id}", response_model=schemas.WebResponse[str])
def remove_address(
    contact_id: int,
    address_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an address of a contact."""
    contact = crud.get_contact_or_404(db, contact_id, current_user)
    address = crud.get_address_or_404(db, contact, address_id)
    crud.delete_address(db, address)
    return {"data": "OK"}
