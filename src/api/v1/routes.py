"""
API v1 routes.

Defines REST endpoints for the user list and the registration form.
"""

import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_image_store, get_page_size, get_session, get_user_service
from src.api.models import (
    DraftResponse,
    DraftUpdateRequest,
    ErrorResponse,
    ProfileImageResponse,
    ReloadResponse,
    UserPageResponse,
    UserResponse,
    ValidationErrorResponse,
)
from src.api.state import UserSession
from src.domain.exceptions import DataSourceError, RegistrationRejected
from src.domain.models import ImageAsset
from src.domain.ports import ImageStore
from src.domain.query import QueryState
from src.domain.users import UserManagementService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])


def _validation_error(errors: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(errors=errors).model_dump(),
    )


async def _read_capped(request: Request, limit: int) -> tuple[bytes, int]:
    """
    Read the request body, giving up as soon as it exceeds limit.

    Returns:
        Tuple of (content, size); content is empty when the body is over
        limit, and size is then only known to be larger than limit
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        return b"", int(declared)

    content = bytearray()
    async for chunk in request.stream():
        content.extend(chunk)
        if len(content) > limit:
            return b"", len(content)
    return bytes(content), len(content)


@router.get(
    "/users",
    response_model=UserPageResponse,
    summary="Search and page through users",
    description="Case-insensitive search over first name, last name and email. "
    "Out-of-range pages are clamped; start from page 1 whenever the search changes.",
)
def list_users(
    search: str = "",
    page: int = 1,
    session: UserSession = Depends(get_session),
    service: UserManagementService = Depends(get_user_service),
    page_size: int = Depends(get_page_size),
) -> UserPageResponse:
    """
    Return one page of users matching the search term.

    - **search**: Free text; empty matches everyone
    - **page**: Requested 1-based page number
    """
    state = QueryState(search_term=search, page_number=page, page_size=page_size)
    return UserPageResponse.from_page(service.search(session.users, state))


@router.post(
    "/users/reload",
    response_model=ReloadResponse,
    responses={502: {"model": ErrorResponse, "description": "Data source unavailable"}},
    summary="Reload users from the data source",
)
def reload_users(
    session: UserSession = Depends(get_session),
    service: UserManagementService = Depends(get_user_service),
) -> ReloadResponse:
    """Replace the in-memory collection with a fresh listing."""
    try:
        users = service.load_users()
    except DataSourceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load users",
        ) from None

    session.users = users
    session.load_failed = False
    return ReloadResponse(message="Users reloaded", count=len(users))


@router.get(
    "/registration",
    response_model=DraftResponse,
    summary="Get the registration draft",
)
def get_registration(session: UserSession = Depends(get_session)) -> DraftResponse:
    return DraftResponse.from_draft(session.draft, session.errors)


@router.patch(
    "/registration",
    response_model=DraftResponse,
    summary="Update registration draft fields",
)
def update_registration(
    request_data: DraftUpdateRequest,
    session: UserSession = Depends(get_session),
) -> DraftResponse:
    """Apply the supplied fields to the draft. Errors are rechecked on submit."""
    changes = request_data.model_dump(exclude_unset=True)
    for name in ("first_name", "last_name", "email", "phone"):
        if changes.get(name) is None:
            changes.pop(name, None)

    session.draft = replace(session.draft, **changes)
    return DraftResponse.from_draft(session.draft, session.errors)


@router.delete(
    "/registration",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard the registration draft",
)
def discard_registration(
    session: UserSession = Depends(get_session),
    image_store: ImageStore = Depends(get_image_store),
) -> Response:
    if session.draft.profile_image_ref:
        image_store.release(session.draft.profile_image_ref)
    session.reset_draft()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/registration/profile-image",
    response_model=ProfileImageResponse,
    responses={422: {"model": ValidationErrorResponse, "description": "Image rejected"}},
    summary="Select a profile image",
    description="Send the raw image bytes with their Content-Type. "
    "JPG and PNG up to 2MB are accepted; a rejected image keeps the previous one.",
)
async def select_profile_image(
    request: Request,
    session: UserSession = Depends(get_session),
    service: UserManagementService = Depends(get_user_service),
    image_store: ImageStore = Depends(get_image_store),
) -> ProfileImageResponse | JSONResponse:
    content, size = await _read_capped(request, service.validator.max_image_bytes)
    media_type = request.headers.get("content-type", "").split(";")[0].strip()
    asset = ImageAsset(size_bytes=size, media_type=media_type)

    previous_ref = session.draft.profile_image_ref
    selection = service.validator.select_image(
        session.draft,
        session.errors,
        asset,
        make_ref=lambda: image_store.hold(content, media_type),
    )
    session.draft = selection.draft
    session.errors = selection.errors

    if not selection.accepted:
        logger.info("Rejected profile image (%s, %d bytes)", media_type, size)
        return _validation_error(selection.errors)

    if previous_ref:
        image_store.release(previous_ref)
    return ProfileImageResponse(profile_image_ref=selection.draft.profile_image_ref)


@router.get(
    "/registration/profile-image",
    responses={404: {"model": ErrorResponse, "description": "No image selected"}},
    summary="Preview the selected profile image",
)
def preview_profile_image(
    session: UserSession = Depends(get_session),
    image_store: ImageStore = Depends(get_image_store),
) -> Response:
    ref = session.draft.profile_image_ref
    held = image_store.get(ref) if ref else None
    if held is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No image selected")
    return Response(content=held.content, media_type=held.media_type)


@router.get(
    "/images/{ref}",
    responses={404: {"model": ErrorResponse, "description": "Unknown image handle"}},
    summary="Get a held image by its local handle",
    description="Serves images whose handle appears as profile_image of a "
    "user registered in this session.",
)
def get_image(ref: str, image_store: ImageStore = Depends(get_image_store)) -> Response:
    held = image_store.get(ref)
    if held is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return Response(content=held.content, media_type=held.media_type)


@router.post(
    "/registration",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Registration already in progress"},
        422: {"model": ValidationErrorResponse, "description": "Validation error"},
        502: {"model": ErrorResponse, "description": "Data source rejected the registration"},
    },
    summary="Register a new user",
    description="Validate the draft and submit it to the data source. "
    "On success the new user is placed at the front of the list and the draft is cleared.",
)
def submit_registration(
    session: UserSession = Depends(get_session),
    service: UserManagementService = Depends(get_user_service),
) -> UserResponse | JSONResponse:
    """
    Submit the current draft.

    Any failure leaves the draft and the user list unchanged.
    """
    if not session.submission_lock.acquire(blocking=False):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration already in progress",
        )

    # Session is updated before the lock is released
    try:
        outcome = service.register(session.draft, session.users)
        session.users = outcome.users
        session.reset_draft()
    except RegistrationRejected as exc:
        session.errors = exc.errors
        return _validation_error(exc.errors)
    except DataSourceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to register user",
        ) from None
    finally:
        session.submission_lock.release()

    return UserResponse.from_user(outcome.user)
