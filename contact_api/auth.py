"""Authentication and authorization related routes and helpers."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from . import schemas, crud
from .database import get_db
from .models import User

API_TOKEN_HEADER = "X-API-TOKEN"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
api_token_scheme = APIKeyHeader(name=API_TOKEN_HEADER, auto_error=False)
router = APIRouter(prefix="/api/users", tags=["auth"])
logger = logging.getLogger(__name__)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Compare a plain password with its hashed value."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate a password hash using the configured context."""
    return pwd_context.hash(password)


def create_api_token() -> str:
    """Generate a new opaque API token."""
    return str(uuid.uuid4())


def get_current_user(
    token: str | None = Depends(api_token_scheme), db: Session = Depends(get_db)
) -> User:
    """Dependency that returns the user owning the ``X-API-TOKEN`` header."""

    user = crud.get_user_by_token(db, token) if token else None
    if user is None:
        logger.warning("Rejected request with missing or unknown API token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return user


@router.post("", response_model=schemas.WebResponse[schemas.UserResponse])
def register(user_in: schemas.UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""

    hashed_password = get_password_hash(user_in.password)
    user = crud.create_user(db, user_in, hashed_password)
    return {"data": schemas.UserResponse.model_validate(user)}


@router.post("/login", response_model=schemas.WebResponse[schemas.LoginResponse])
def login(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """Authenticate user and issue a fresh API token."""

    user = crud.get_user_by_username(db, credentials.username)
    if not user or not verify_password(credentials.password, user.password):
        logger.warning("Failed login for %s", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Username or password is wrong",
        )
    user = crud.set_user_token(db, user, create_api_token())
    logger.info("User %s logged in", user.username)
    return {"data": schemas.LoginResponse.model_validate(user)}
