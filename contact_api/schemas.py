from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

DataT = TypeVar("DataT")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
EMAIL_MAX_LENGTH = 100


def _check_email_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email should have at most {EMAIL_MAX_LENGTH} characters")
    return value


def _reject_null(value, info):
    if value is None:
        raise ValueError(f"{info.field_name} may not be null")
    return value


class UserCreate(BaseModel):
    """Payload for registering a new user."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)


class UserLogin(BaseModel):
    """Credentials exchanged for an API token."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)


class UserUpdate(BaseModel):
    """Schema for updating the current user (all fields optional)."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1, max_length=100)

    reject_null = field_validator("name", "password")(_reject_null)


class UserResponse(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    name: str


class LoginResponse(UserResponse):
    """User view returned by login, carrying the freshly issued token."""

    token: str


class ContactCreate(BaseModel):
    """Schema for creating new contact."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)

    check_email_length = field_validator("email")(_check_email_length)


class ContactUpdate(BaseModel):
    """Schema for updating contact (all fields optional)."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)

    check_email_length = field_validator("email")(_check_email_length)
    reject_null = field_validator("first_name")(_reject_null)


class ContactSearch(BaseModel):
    """Filters and page window for listing contacts."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    page: int = Field(1, ge=1)
    size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class ContactResponse(BaseModel):
    """Schema for returning contact with ID."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class AddressCreate(BaseModel):
    """Schema for adding an address to a contact."""

    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    province: Optional[str] = Field(None, max_length=100)
    country: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(min_length=1, max_length=10)


class AddressUpdate(BaseModel):
    """Schema for updating address (all fields optional)."""

    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    province: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, min_length=1, max_length=10)

    reject_null = field_validator("country", "postal_code")(_reject_null)


class AddressResponse(BaseModel):
    """Public view of an address; the owning contact is implied by the URL."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: str
    postal_code: str


class Paging(BaseModel):
    """Page window metadata attached to list responses."""

    size: int
    total_page: int
    current_page: int


class WebResponse(BaseModel, Generic[DataT]):
    """Success envelope wrapping a single payload."""

    data: DataT


class PageResponse(BaseModel, Generic[DataT]):
    """Success envelope for a page of results."""

    data: List[DataT]
    paging: Paging
