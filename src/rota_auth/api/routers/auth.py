"""
rota_auth.api.routers.auth

Authentication endpoints.

Responsibilities:
- Parse request bodies and hand raw values to `AuthService`.
- Set/clear the session cookie and shape responses (201 signup, 206 pending 2FA).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from starlette.status import HTTP_200_OK, HTTP_201_CREATED, HTTP_206_PARTIAL_CONTENT

from rota_auth.api.deps import auth_service_dep, settings_dep
from rota_auth.auth.deps import session_token
from rota_auth.services.auth_service import AuthService, Authenticated
from rota_auth.settings import Settings

router = APIRouter(prefix="/auth", tags=["auth"])


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: SecretStr
    requires_2fa: bool = Field(alias="requires2FA")


class LoginRequest(BaseModel):
    email: str
    password: SecretStr


class Verify2FARequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    login_attempt_id: str = Field(alias="loginAttemptId")
    two_fa_code: SecretStr = Field(alias="2FACode")


class VerifyTokenRequest(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    message: str = "Authenticated"
    access_token: str
    token_type: str = "bearer"


class TwoFactorAuthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "2FA required"
    login_attempt_id: str = Field(alias="loginAttemptId")


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.env == "prod",
        max_age=settings.token_ttl_seconds,
    )


@router.post("/signup", status_code=HTTP_201_CREATED, response_model=MessageResponse)
async def signup(
    body: SignupRequest,
    auth: AuthService = Depends(auth_service_dep),
) -> MessageResponse:
    await auth.signup(email=body.email, password=body.password, requires_2fa=body.requires_2fa)
    return MessageResponse(message="User created successfully")


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={HTTP_206_PARTIAL_CONTENT: {"model": TwoFactorAuthResponse}},
)
async def login(
    body: LoginRequest,
    response: Response,
    auth: AuthService = Depends(auth_service_dep),
    settings: Settings = Depends(settings_dep),
) -> TokenResponse | JSONResponse:
    result = await auth.login(email=body.email, password=body.password)
    if isinstance(result, Authenticated):
        _set_session_cookie(response, result.token, settings)
        response.status_code = HTTP_200_OK
        return TokenResponse(access_token=result.token)

    # The code itself only ever travels by email.
    pending = TwoFactorAuthResponse(login_attempt_id=result.login_attempt_id.expose_secret())
    return JSONResponse(status_code=HTTP_206_PARTIAL_CONTENT, content=pending.model_dump(by_alias=True))


@router.post("/verify-2fa", response_model=TokenResponse)
async def verify_2fa(
    body: Verify2FARequest,
    response: Response,
    auth: AuthService = Depends(auth_service_dep),
    settings: Settings = Depends(settings_dep),
) -> TokenResponse:
    token = await auth.verify_2fa(
        email=body.email,
        login_attempt_id=body.login_attempt_id,
        two_fa_code=body.two_fa_code,
    )
    _set_session_cookie(response, token, settings)
    return TokenResponse(access_token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: str | None = Depends(session_token),
    auth: AuthService = Depends(auth_service_dep),
    settings: Settings = Depends(settings_dep),
) -> MessageResponse:
    await auth.logout(token)
    response.delete_cookie(settings.jwt_cookie_name, path="/")
    return MessageResponse(message="Logged out")


@router.post("/verify-token", response_model=MessageResponse)
async def verify_token(
    body: VerifyTokenRequest,
    auth: AuthService = Depends(auth_service_dep),
) -> MessageResponse:
    await auth.verify_token(body.token)
    return MessageResponse(message="Token is valid")


@router.delete("/delete-user", response_model=MessageResponse)
async def delete_user(
    response: Response,
    token: str | None = Depends(session_token),
    auth: AuthService = Depends(auth_service_dep),
    settings: Settings = Depends(settings_dep),
) -> MessageResponse:
    email = await auth.delete_account(token)
    response.delete_cookie(settings.jwt_cookie_name, path="/")
    return MessageResponse(message=f"User deleted: {email.expose_secret()}")


# --- Module Notes -----------------------------------------------------------
# Errors raised by AuthService are rendered by `rota_auth.api.errors`; routes
# never build error responses themselves.
