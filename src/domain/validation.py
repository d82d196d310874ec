"""
Registration form validation.

FormValidator checks a RegistrationDraft and reports every failing field
at once as a field-keyed error map (ValidationResult). An empty map means
the draft may be submitted.

Rules
=====

- first_name / last_name: at least 3 characters
- email: local@domain.tld, no whitespace or "@" in either part
- phone: country code and 10-digit number, e.g. +91-9876543210
- gender: must be selected
- profile_image: required only when require_profile_image is set

Image selection is checked separately, when the image is picked rather
than at submission: size at most 2 MiB, media type image/jpeg or image/png.
"""

import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass, replace

from .models import FieldError, ImageAsset, RegistrationDraft

ValidationResult = dict[str, str]

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\+\d{1,3}-\d{10}", re.ASCII)

MIN_NAME_LENGTH = 3
MAX_IMAGE_BYTES = 2 * 1024 * 1024
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png"})

PROFILE_IMAGE_FIELD = "profile_image"

FIRST_NAME_TOO_SHORT = "First name must be at least 3 characters"
LAST_NAME_TOO_SHORT = "Last name must be at least 3 characters"
INVALID_EMAIL = "Invalid email format"
INVALID_PHONE = "Phone number must include country code (+XX-XXXXXXXXXX)"
GENDER_REQUIRED = "Gender is required"
PROFILE_IMAGE_REQUIRED = "Profile image is required"
IMAGE_TOO_LARGE = "Image must be less than 2MB"
IMAGE_TYPE_NOT_ALLOWED = "Only JPG and PNG images are allowed"


def new_local_ref() -> str:
    """Generate an opaque handle for a locally selected image."""
    return f"local-image:{secrets.token_urlsafe(16)}"


def field_errors(result: ValidationResult) -> list[FieldError]:
    """Flatten a ValidationResult into FieldError records, in field order."""
    return [FieldError(field=field, message=message) for field, message in result.items()]


@dataclass(frozen=True)
class ImageSelection:
    """Outcome of selecting an image: the draft and errors to keep."""

    draft: RegistrationDraft
    errors: ValidationResult
    accepted: bool


@dataclass(frozen=True)
class FormValidator:
    """
    Stateless validator for registration drafts.

    The profile image policy is explicit: with require_profile_image unset
    (the default) a draft without an image is acceptable.
    """

    require_profile_image: bool = False
    max_image_bytes: int = MAX_IMAGE_BYTES

    def validate(self, draft: RegistrationDraft) -> ValidationResult:
        """
        Validate a draft, accumulating one message per failing field.

        Never raises for invalid input.

        Args:
            draft: Registration draft to check

        Returns:
            Field name to error message; empty if the draft is acceptable
        """
        errors: ValidationResult = {}

        if len(draft.first_name) < MIN_NAME_LENGTH:
            errors["first_name"] = FIRST_NAME_TOO_SHORT

        if len(draft.last_name) < MIN_NAME_LENGTH:
            errors["last_name"] = LAST_NAME_TOO_SHORT

        if not EMAIL_PATTERN.fullmatch(draft.email):
            errors["email"] = INVALID_EMAIL

        if not PHONE_PATTERN.fullmatch(draft.phone):
            errors["phone"] = INVALID_PHONE

        if not draft.gender:
            errors["gender"] = GENDER_REQUIRED

        if self.require_profile_image and not draft.profile_image_ref:
            errors[PROFILE_IMAGE_FIELD] = PROFILE_IMAGE_REQUIRED

        return errors

    def check_image(self, asset: ImageAsset) -> str | None:
        """Return the rejection message for a selected image, or None."""
        if asset.size_bytes > self.max_image_bytes:
            return IMAGE_TOO_LARGE
        if asset.media_type not in ALLOWED_IMAGE_TYPES:
            return IMAGE_TYPE_NOT_ALLOWED
        return None

    def select_image(
        self,
        draft: RegistrationDraft,
        errors: ValidationResult,
        asset: ImageAsset,
        make_ref: Callable[[], str] = new_local_ref,
    ) -> ImageSelection:
        """
        Apply an image selection to a draft.

        A rejected image leaves the draft (and any previously accepted
        image) untouched and records the reason under "profile_image".
        An accepted image gets a fresh handle from make_ref and clears
        any earlier image error. Neither input is mutated.

        Args:
            draft: Current draft
            errors: Current field errors shown to the user
            asset: Size and media type of the selected image
            make_ref: Called once, only on acceptance, to obtain the handle

        Returns:
            ImageSelection with the draft and errors the caller should keep
        """
        message = self.check_image(asset)
        if message is not None:
            return ImageSelection(
                draft=draft,
                errors={**errors, PROFILE_IMAGE_FIELD: message},
                accepted=False,
            )

        remaining = {field: msg for field, msg in errors.items() if field != PROFILE_IMAGE_FIELD}
        return ImageSelection(
            draft=replace(draft, profile_image_ref=make_ref()),
            errors=remaining,
            accepted=True,
        )
