"""Account endpoints: register, verify, login, password reset."""

from fastapi import APIRouter

from catalog.dependencies import DB
from catalog.schemas.common import Flash, MutationResponse
from catalog.schemas.user import (
    LoginRequest,
    NewPasswordRequest,
    RegisterRequest,
    ResetRequest,
    UserResponse,
)
from catalog.services import auth

router = APIRouter(prefix="/security", tags=["security"])


@router.post("/register", response_model=MutationResponse[UserResponse], status_code=201)
async def register(body: RegisterRequest, db: DB) -> MutationResponse[UserResponse]:
    """Create a pending account; the verification link is sent out of band."""
    user = await auth.register(db, name=body.name, email=body.email, password=body.password)
    return MutationResponse(
        data=UserResponse.model_validate(user),
        flash=Flash.success("User registered successfully"),
    )


@router.post("/verify/{token}", response_model=MutationResponse[UserResponse])
async def verify(token: str, db: DB) -> MutationResponse[UserResponse]:
    user = await auth.verify(db, token)
    return MutationResponse(
        data=UserResponse.model_validate(user),
        flash=Flash.success("Account verified successfully"),
    )


@router.post("/login", response_model=MutationResponse[UserResponse])
async def login(body: LoginRequest, db: DB) -> MutationResponse[UserResponse]:
    user = await auth.login(db, email=body.email, password=body.password)
    return MutationResponse(
        data=UserResponse.model_validate(user),
        flash=Flash.success(f"Welcome, {user.name}"),
    )


@router.post("/reset", response_model=MutationResponse[None], status_code=202)
async def request_reset(body: ResetRequest, db: DB) -> MutationResponse[None]:
    await auth.request_password_reset(db, email=body.email)
    return MutationResponse(
        flash=Flash.success("If the account exists, a password reset link has been sent")
    )


@router.get("/reset/{token}", response_model=UserResponse)
async def reset_form(token: str, db: DB) -> UserResponse:
    """Resolve a reset token to its account, 404 when the token is not valid."""
    return UserResponse.model_validate(await auth.get_reset_user(db, token))


@router.post("/reset/{token}", response_model=MutationResponse[None])
async def reset_password(token: str, body: NewPasswordRequest, db: DB) -> MutationResponse[None]:
    await auth.reset_password(db, token, password=body.password)
    return MutationResponse(flash=Flash.success("Password changed successfully"))
