"""
Wire models for the dummyjson users API.

Records coming back from the source are parsed into explicit pydantic
models here, so the domain only ever sees complete User values.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.domain.models import DEFAULT_PROFILE_IMAGE, RegistrationDraft, User


class UserRecord(BaseModel):
    """A user as returned by GET /users or POST /users/add."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    first_name: str = Field(default="", validation_alias="firstName")
    last_name: str = Field(default="", validation_alias="lastName")
    gender: str = ""
    email: str = ""
    phone: str = ""
    # Listings use "image"; records echoed back by /users/add keep "profileImage"
    profile_image: str | None = Field(
        default=None, validation_alias=AliasChoices("profileImage", "image")
    )

    def to_user(self, placeholder_image: str = DEFAULT_PROFILE_IMAGE) -> User:
        return User(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            gender=self.gender,
            email=self.email,
            phone=self.phone,
            profile_image=self.profile_image or placeholder_image,
        )


class UserListing(BaseModel):
    """Envelope of GET /users."""

    model_config = ConfigDict(extra="ignore")

    users: list[UserRecord] | None = None


class NewUserPayload(BaseModel):
    """Body of POST /users/add."""

    first_name: str = Field(serialization_alias="firstName")
    last_name: str = Field(serialization_alias="lastName")
    gender: str
    email: str
    phone: str
    profile_image: str | None = Field(default=None, serialization_alias="profileImage")

    @classmethod
    def from_draft(cls, draft: RegistrationDraft) -> "NewUserPayload":
        return cls(
            first_name=draft.first_name,
            last_name=draft.last_name,
            gender=draft.gender.value if draft.gender else "",
            email=draft.email,
            phone=draft.phone,
            profile_image=draft.profile_image_ref,
        )
