"""Registration, login and logout endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_current_user_id, get_settings, get_store
from core.config import Settings
from core.session import SESSION_COOKIE_NAME, create_session_token, session_cookie_options
from db.store import BookmarkStore
from schemas.user import UserLogin, UserRegister, UserResponse
from services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    data: UserRegister,
    store: BookmarkStore = Depends(get_store),
) -> UserResponse:
    """
    Create an account.

    Returns 409 if the email is already registered (compared case-insensitively).
    Registering does not sign the user in.
    """
    user = await user_service.create_user(store, data.username, data.email, data.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(
    data: UserLogin,
    response: Response,
    store: BookmarkStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    """Check credentials and set the session cookie."""
    user = await user_service.verify_credentials(store, data.email, data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_session_token(user.id, settings)
    response.set_cookie(SESSION_COOKIE_NAME, token, **session_cookie_options(settings))
    return UserResponse.model_validate(user)


@router.post("/logout", status_code=204)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Clear the session cookie.

    The token itself stays valid until it expires; there is no server-side session
    to revoke.
    """
    options = {**session_cookie_options(settings), "max_age": 0}
    response.set_cookie(SESSION_COOKIE_NAME, "", **options)


@router.get("/me", response_model=UserResponse)
async def get_me(
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> UserResponse:
    """Get the signed-in user's public profile."""
    user = await user_service.find_user_by_id(store, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return UserResponse.model_validate(user)
