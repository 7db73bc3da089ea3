from datetime import datetime

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel

from backend.auth.dependencies import get_auth_service
from backend.auth.service import AuthService
from backend.core import config

router = APIRouter(tags=['auth'])


class RegisterRequest(BaseModel):
    # Everything optional so missing fields surface as a validation step, not a 422.
    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'


class SessionResponse(BaseModel):
    user_id: int
    expires_at: datetime


class MessageResponse(BaseModel):
    message: str


def client_ip(request: Request) -> str:
    return request.client.host if request.client else ''


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=config.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=config.REFRESH_TOKEN_EXPIRES_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
    )


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=config.REFRESH_COOKIE_NAME,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
    )


@router.post('/register', response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    user = service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        password_confirmation=payload.password_confirmation,
        role=payload.role,
    )
    return RegisterResponse(message='User created', user=UserResponse.model_validate(user))


@router.post('/login', response_model=TokenResponse)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    result = service.login(
        email=payload.email,
        password=payload.password,
        ip=client_ip(request),
        user_agent=request.headers.get('user-agent', ''),
    )
    set_refresh_cookie(response, result.refresh_token)
    return TokenResponse(access_token=result.access_token)


@router.post('/logout', response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    service.logout(request.cookies.get(config.REFRESH_COOKIE_NAME))
    clear_refresh_cookie(response)
    return MessageResponse(message='Logged out')


@router.post('/refresh', response_model=TokenResponse)
def refresh(
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    refresh_token = request.cookies.get(config.REFRESH_COOKIE_NAME)
    result = service.refresh(refresh_token)
    set_refresh_cookie(response, refresh_token)
    return TokenResponse(access_token=result.access_token)


@router.get('/session', response_model=SessionResponse)
def current_session(request: Request, service: AuthService = Depends(get_auth_service)):
    session = service.validate_session(request.cookies.get(config.REFRESH_COOKIE_NAME))
    return SessionResponse(user_id=session.user_id, expires_at=session.expires_at)
