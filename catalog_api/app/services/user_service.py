"""
Business logic for users.

``UserService`` enforces the user invariants on top of the
``UserRepository``: e-mail addresses are unique, identifiers passed to
``delete_user`` must be positive and missing users are reported as
``NotFoundError``.  The e-mail check before each write is a fast path
only; the unique index on ``users.email`` rejects the losing writer of
two concurrent registrations and that rejection is reported as the same
``ConflictError``.

Passwords are hashed before they are stored and are never returned.
"""

import logging
from typing import NoReturn, Optional

from ..core import metrics as m
from ..core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from ..core.security import hash_password
from ..mappers import apply_user_update, user_from_create, user_to_read
from ..repositories import DuplicateKeyError, UserRepository
from ..schemas.page import Page
from ..schemas.user import UserCreate, UserRead, UserUpdate
from .base import BaseService

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"
USER_NOT_FOUND = "User not found"


class UserService(BaseService):
    """Service for listing, reading, registering, updating and deleting users."""

    def __init__(self, repository: UserRepository, metrics: m.CounterSink, clock=None) -> None:
        super().__init__(metrics, clock)
        self.repository = repository

    def list_users(self, page: int, size: int, name: Optional[str] = None) -> Page[UserRead]:
        """Return one page of users, optionally filtered by name substring.

        A ``name`` of ``None`` lists every user; any string, including
        the empty one, is matched case-insensitively against the name.
        """
        logger.debug("Fetching users from database - name filter: %s", name)
        users, total = self.repository.query_page(page, size, name)
        if name is not None:
            logger.debug("Found %s users matching name '%s'", total, name)
        else:
            logger.debug("Found %s total users", total)
        return Page[UserRead].of([user_to_read(u) for u in users], page, size, total)

    def get_user(self, user_id: int) -> UserRead:
        logger.debug("Searching for user with id: %s", user_id)
        user = self.repository.find_by_id(user_id)
        if user is None:
            self._not_found(user_id)
        logger.debug("User found: %s", user.email)
        return user_to_read(user)

    def create_user(self, data: UserCreate) -> UserRead:
        """Register a new user.

        Raises ``ConflictError`` when the e-mail is already taken, either
        by the pre-check or by the database unique index.  No row is
        written in that case.
        """
        user = user_from_create(data)
        logger.debug("Attempting to create user with email: %s", user.email)
        if self.repository.exists_by_email(user.email):
            self._email_conflict(user.email)

        user.password = hash_password(user.password)
        user.created_at = self.clock()
        try:
            saved = self.repository.insert(user)
        except DuplicateKeyError as e:
            # Another registration with the same e-mail committed first.
            self._email_conflict(user.email, e)
        self._count(m.USERS_CREATED)
        logger.info("User created successfully with id: %s and email: %s", saved.id, saved.email)
        return user_to_read(saved)

    def update_user(self, user_id: int, data: UserUpdate) -> UserRead:
        """Replace a user's name, e-mail and password.

        ``created_at`` is preserved and ``updated_at`` is refreshed.
        """
        logger.debug("Attempting to update user with id: %s", user_id)
        user = self.repository.find_by_id(user_id)
        if user is None:
            self._not_found(user_id)

        new_email = str(data.email)
        if new_email != user.email and self.repository.exists_by_email_excluding_id(new_email, user_id):
            self._email_conflict(new_email)

        apply_user_update(data, user)
        user.password = hash_password(user.password)
        user.updated_at = self._touch(user.updated_at)
        try:
            updated = self.repository.update(user)
        except DuplicateKeyError as e:
            self._email_conflict(new_email, e)
        if updated is None:
            # Deleted between the read and the write.
            self._not_found(user_id)
        self._count(m.USERS_UPDATED)
        logger.info("User updated successfully with id: %s and email: %s", updated.id, updated.email)
        return user_to_read(updated)

    def delete_user(self, user_id: int) -> None:
        logger.debug("Attempting to delete user with id: %s", user_id)
        if user_id is None or user_id <= 0:
            logger.warning("Invalid user id provided for deletion: %s", user_id)
            raise InvalidArgumentError("Invalid user ID")

        if not self.repository.exists_by_id(user_id):
            self._count(m.USERS_NOT_FOUND)
            logger.warning("Attempt to delete non-existent user with id: %s", user_id)
            raise NotFoundError(USER_NOT_FOUND)
        if not self.repository.delete_by_id(user_id):
            # Deleted by another request after the existence check.
            self._not_found(user_id)
        self._count(m.USERS_DELETED)
        logger.info("User with id %s deleted successfully", user_id)

    def _not_found(self, user_id: int) -> NoReturn:
        self._count(m.USERS_NOT_FOUND)
        logger.warning("User not found with id: %s", user_id)
        raise NotFoundError(USER_NOT_FOUND)

    def _email_conflict(self, email: str, cause: Optional[Exception] = None) -> NoReturn:
        self._count(m.USERS_EMAIL_CONFLICT)
        logger.warning("Attempt to use existing email: %s", email)
        raise ConflictError(EMAIL_IN_USE) from cause
