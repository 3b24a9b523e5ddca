"""User API: thin routes delegating to UserAccessService.

Only POST (registration) is public. Every other route needs a bearer token
and acts on the caller's own record.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from useraccounts.api.v1.dependencies import (
    get_current_caller,
    get_owner_access_service,
    get_user_access_service,
)
from useraccounts.api.v1.responses import to_response
from useraccounts.application.dtos.user import NewUser, UserUpdate
from useraccounts.application.services.user_service import UserAccessService
from useraccounts.schemas.user import (
    MessageResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()

_ERRORS = {
    401: {"model": MessageResponse},
    403: {"model": MessageResponse},
    404: {"model": MessageResponse},
    500: {"model": MessageResponse},
}


@router.get(
    "",
    response_model=list[UserResponse],
    dependencies=[Depends(get_current_caller)],
    responses={401: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def list_users(
    service: Annotated[UserAccessService, Depends(get_user_access_service)],
) -> JSONResponse:
    """List all users (id and username only)."""
    return to_response(await service.list_all())


@router.get("/{user_id}", response_model=UserResponse, responses=_ERRORS)
async def get_user(
    user_id: str,
    caller: Annotated[str, Depends(get_current_caller)],
    service: Annotated[UserAccessService, Depends(get_user_access_service)],
) -> JSONResponse:
    """Get the caller's own record by id."""
    return to_response(await service.get_by_id(user_id, caller))


@router.post(
    "",
    response_model=MessageResponse,
    responses={409: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def create_user(
    body: UserCreateRequest,
    service: Annotated[UserAccessService, Depends(get_user_access_service)],
) -> JSONResponse:
    """Register a user (public endpoint)."""
    result = await service.add_user(
        NewUser(username=body.username, password=body.password)
    )
    return to_response(result)


@router.put(
    "",
    response_model=UserResponse,
    responses={**_ERRORS, 409: {"model": MessageResponse}},
)
async def update_user(
    body: UserUpdateRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    service: Annotated[UserAccessService, Depends(get_owner_access_service)],
) -> JSONResponse:
    """Replace the caller's username and password. The current token is revoked."""
    update = UserUpdate(id=body.id, username=body.username, password=body.password)
    return to_response(await service.update_by_id(update, caller))


@router.delete("/{user_id}", response_model=MessageResponse, responses=_ERRORS)
async def delete_user(
    user_id: str,
    caller: Annotated[str, Depends(get_current_caller)],
    service: Annotated[UserAccessService, Depends(get_owner_access_service)],
) -> JSONResponse:
    """Delete the caller's own record. The current token is revoked."""
    return to_response(await service.delete_by_id(user_id, caller))
