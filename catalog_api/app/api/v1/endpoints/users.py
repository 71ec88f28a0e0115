"""
User endpoints for API v1.

Thin handlers over ``UserService``: listing with pagination and an
optional name filter, lookup by id, registration, full update and
deletion.  Business errors raised by the service are translated to
HTTP errors here; database outages propagate to the application level
handler.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog_api.app.core.exceptions import CLIENT_ERRORS
from catalog_api.app.schemas.page import Page
from catalog_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from catalog_api.app.services.user_service import UserService
from catalog_api.app.api.deps import PageRequest, get_page_request, get_user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Page[UserRead])
def list_users(
    paging: PageRequest = Depends(get_page_request),
    name: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
) -> Page[UserRead]:
    """Return a page of users.

    - **page**, **size**: zero based page index and page size.
    - **name**: optional case-insensitive substring of the user name.
    """
    logger.info("list_users - page: %s, size: %s, name: %s", paging.page, paging.size, name)
    return service.list_users(paging.page, paging.size, name)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> UserRead:
    logger.info("get_user - id: %s", user_id)
    try:
        return service.get_user(user_id)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, service: UserService = Depends(get_user_service)) -> UserRead:
    """Register a new user.

    Returns HTTP 409 if the e-mail address is already in use.
    """
    logger.info("create_user - email: %s", user.email)
    try:
        return service.create_user(user)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    user: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Replace a user's name, e-mail and password.

    Returns HTTP 404 for an unknown user and HTTP 409 if the new e-mail
    belongs to another user.
    """
    logger.info("update_user - id: %s, email: %s", user_id, user.email)
    try:
        return service.update_user(user_id, user)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> None:
    """Delete a user by ID.

    Non-positive identifiers are rejected with HTTP 400 before the
    database is queried.
    """
    logger.info("delete_user - id: %s", user_id)
    try:
        service.delete_user(user_id)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return None
