"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field

from src.domain.models import Gender, RegistrationDraft, User
from src.domain.query import UserPage


class UserResponse(BaseModel):
    """A user row of the list view."""

    id: int | None
    first_name: str
    last_name: str
    gender: str
    email: str
    phone: str
    profile_image: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            gender=user.gender,
            email=user.email,
            phone=user.phone,
            profile_image=user.profile_image,
        )


class UserPageResponse(BaseModel):
    """Response model for one page of the searchable user list."""

    users: list[UserResponse]
    page: int = Field(..., description="Page number after clamping to [1, total_pages]")
    total_pages: int
    match_count: int
    no_users_found: bool

    @classmethod
    def from_page(cls, page: UserPage) -> "UserPageResponse":
        return cls(
            users=[UserResponse.from_user(user) for user in page.users],
            page=page.page_number,
            total_pages=page.total_pages,
            match_count=page.match_count,
            no_users_found=page.is_empty,
        )


class ReloadResponse(BaseModel):
    """Response model for a successful reload from the data source."""

    message: str
    count: int


class DraftUpdateRequest(BaseModel):
    """Partial update of the registration draft. Omitted fields are kept."""

    first_name: str | None = None
    last_name: str | None = None
    gender: Gender | None = None
    email: str | None = None
    phone: str | None = None


class DraftResponse(BaseModel):
    """Current registration draft and the errors shown for it."""

    first_name: str
    last_name: str
    gender: Gender | None
    email: str
    phone: str
    profile_image_ref: str | None
    errors: dict[str, str]

    @classmethod
    def from_draft(cls, draft: RegistrationDraft, errors: dict[str, str]) -> "DraftResponse":
        return cls(
            first_name=draft.first_name,
            last_name=draft.last_name,
            gender=draft.gender,
            email=draft.email,
            phone=draft.phone,
            profile_image_ref=draft.profile_image_ref,
            errors=errors,
        )


class ProfileImageResponse(BaseModel):
    """Response model for an accepted profile image."""

    profile_image_ref: str


class ValidationErrorResponse(BaseModel):
    """Field-keyed validation errors blocking the request."""

    errors: dict[str, str]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
