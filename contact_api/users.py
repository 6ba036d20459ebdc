"""User-related routes and operations for the Contact Management API."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .auth import get_current_user, get_password_hash
from .database import get_db
from . import schemas, crud

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/current", response_model=schemas.WebResponse[schemas.UserResponse])
def read_current(current_user=Depends(get_current_user)):
    """
    Retrieve details of the currently authenticated user.

    Args:
        current_user (User): User owning the request's API token.

    Returns:
        dict: Envelope with the user profile.
    """
    return {"data": schemas.UserResponse.model_validate(current_user)}


@router.patch("/current", response_model=schemas.WebResponse[schemas.UserResponse])
def update_current(
    changes: schemas.UserUpdate,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Change the name and/or password of the authenticated user.

    Only fields present in the request are touched; a new password is
    hashed before it is stored.

    Args:
        changes (UserUpdate): Fields to update.
        current_user (User): Authenticated user.
        db (Session): Database session.

    Returns:
        dict: Envelope with the updated user profile.
    """
    values = changes.model_dump(exclude_unset=True)
    if "password" in values:
        values["password"] = get_password_hash(values["password"])
    user = crud.update_user(db, current_user, values)
    logger.info("User %s updated fields %s", user.username, sorted(values))
    return {"data": schemas.UserResponse.model_validate(user)}


@router.delete("/current", response_model=schemas.WebResponse[str])
def logout(current_user=Depends(get_current_user), db: Session = Depends(get_db)):
    """Invalidate the API token of the authenticated user."""

    crud.set_user_token(db, current_user, None)
    logger.info("User %s logged out", current_user.username)
    return {"data": "OK"}
