# storefront/routers/auth.py
from fastapi import APIRouter, Depends, status

from storefront.core.auth import require_auth
from storefront.dependencies import get_auth_service
from storefront.models.user import User
from storefront.schemas.common import ApiResponse, MessageResponse
from storefront.schemas.user import AuthPayload, LoginRequest, RegisterRequest, UserRead
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Create an account and return it with a bearer token.
    """
    user, token = service.register(payload)
    return ApiResponse[AuthPayload](
        data=AuthPayload(user=UserRead.model_validate(user), token=token),
        message="User registered successfully",
    )


@router.post("/login", response_model=ApiResponse[AuthPayload], response_model_exclude_none=True)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.login(payload)
    return ApiResponse[AuthPayload](
        data=AuthPayload(user=UserRead.model_validate(user), token=token),
        message="Login successful",
    )


@router.get("/me", response_model=ApiResponse[UserRead], response_model_exclude_none=True)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires a valid bearer token.
    """
    return ApiResponse[UserRead](data=UserRead.model_validate(current_user))


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Tokens are stateless; the client just drops its copy."""
    return MessageResponse(message="Logged out successfully")
