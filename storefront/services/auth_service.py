# storefront/services/auth_service.py
import logging
import uuid

from storefront.core.config import Settings
from storefront.core.errors import Conflict, NotFound, Unauthorized, ValidationFailure
from storefront.core.security import create_access_token, hash_password, verify_password
from storefront.models.user import User
from storefront.repositories.base import DuplicateUser, UserRepository
from storefront.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Business logic for registration and login.

    Responsibilities:
      - password rules (length, confirmation)
      - unique, lower-cased emails
      - issuing bearer tokens
    """

    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.settings = settings

    def register(self, payload: RegisterRequest) -> tuple[User, str]:
        if payload.password != payload.confirm_password:
            raise ValidationFailure("Passwords do not match")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailure(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        email = payload.email.lower()
        if self.users.get_by_email(email) is not None:
            raise Conflict("User already exists with this email")

        user = User(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
        )
        try:
            user = self.users.create(user)
        except DuplicateUser:
            raise Conflict("User already exists with this email")

        logger.info("Registered user %s", user.id)
        return user, create_access_token(self.settings, str(user.id))

    def login(self, payload: LoginRequest) -> tuple[User, str]:
        user = self.users.get_by_email(payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            raise Unauthorized("Invalid email or password")
        return user, create_access_token(self.settings, str(user.id))

    def get_user(self, user_id: uuid.UUID) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user
