"""Single-sign-on routes.

Client role: ``/sso/login/{provider}`` sends the browser to an upstream
provider and ``/sso/callback/{provider}`` reconciles the returned identity
with a local account.

Server role: ``/sso/authorize``, ``/sso/access_token`` and
``/sso/userinfo`` let downstream applications sign users in through us.
"""

import logging
import secrets
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, Request, status
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse

from sso.application.usecase.sso import (
    AuthorizeUseCase,
    GetAccessTokenUseCase,
    GetSessionUseCase,
    GetUserInfoUseCase,
    LoginUseCase,
    LogoutUseCase,
)
from sso.application.usecase.sso.access_token import (
    GetAccessTokenRequest,
    GetAccessTokenResponse,
)
from sso.application.usecase.sso.authorize import AuthorizeRequest
from sso.application.usecase.sso.login import LoginRequest
from sso.application.usecase.sso.session import GetSessionRequest
from sso.application.usecase.sso.user_info import (
    BasicUserInfo,
    ExtendedUserInfo,
    GetUserInfoRequest,
)
from sso.config import Settings
from sso.domain.error import AccountDisabledError, LoginRequiredError
from sso.domain.model import SessionContext
from sso.domain.service import AuthService, AvatarService, JWTService
from sso.domain.value import UserId
from sso.interface.error import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sso", tags=["sso"], route_class=DishkaRoute)

STATE_COOKIE = "sso_state"
STATE_MAX_AGE = 600  # Seconds a login round-trip may take


def _state_for(action: str | None) -> str:
    """OAuth state carrying the caller's ``sso_action`` through the provider."""
    return f"{action or ''}:{secrets.token_urlsafe(24)}"


def _action_from_state(state: str) -> str | None:
    """Recover ``sso_action`` from an OAuth state built by ``_state_for``."""
    action, sep, _ = state.partition(":")
    if not sep:
        return None
    return action or None


def _client_host(request: Request) -> str | None:
    return request.client.host if request.client else None


async def _session(
    request: Request,
    settings: Settings,
    session_use_case: GetSessionUseCase,
    action: str | None = None,
) -> SessionContext:
    return await session_use_case.execute(
        GetSessionRequest(
            token=request.cookies.get(settings.session.cookie_name),
            action=action,
            origin=_client_host(request),
        )
    )


def _set_session_cookie(
    response: RedirectResponse, token: str, settings: Settings
) -> None:
    response.set_cookie(
        key=settings.session.cookie_name,
        value=token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path="/",
        max_age=settings.session.expiry_days * 24 * 60 * 60,
    )


@router.get("/login/{provider}")
async def login(
    provider: str,
    auth_service: FromDishka[AuthService],
    sso_action: str | None = None,
) -> RedirectResponse:
    """Redirect the browser to the upstream provider.

    Args:
        provider: Configured provider key
        sso_action: ``bind`` to attach the identity to the signed-in account

    Example:
        GET /sso/login/github?sso_action=bind
    """
    state = _state_for(sso_action)
    auth_url = await auth_service.initiate_login(provider, state)

    logger.info(f"Redirecting to {provider} for login (action={sso_action})")

    response = RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        key=STATE_COOKIE,
        value=state,
        httponly=True,
        samesite="lax",
        path="/sso",
        max_age=STATE_MAX_AGE,
    )
    return response


@router.get("/callback/{provider}")
async def callback(
    provider: str,
    code: str,
    state: str,
    request: Request,
    auth_service: FromDishka[AuthService],
    session_use_case: FromDishka[GetSessionUseCase],
    login_use_case: FromDishka[LoginUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    sso_state: str | None = Cookie(default=None),
):
    """Reconcile the provider's identity and sign the user in.

    Returns:
        302 to the post-login target with the session cookie set; 302 to
        the local login page when binding needs a signed-in account; 403
        when the account is disabled
    """
    if not sso_state or not secrets.compare_digest(sso_state, state):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="OAuth state mismatch"
        )

    identity = await auth_service.complete_login(provider, code, state)
    session = await _session(
        request, settings, session_use_case, action=_action_from_state(state)
    )

    try:
        result = await login_use_case.execute(
            LoginRequest(identity=identity, session=session)
        )
    except AccountDisabledError as e:
        # Returned rather than raised: the link and login counters are kept
        logger.warning(f"Disabled account rejected: {e.user_name}")
        return error_response(e)
    except LoginRequiredError:
        logger.info(f"{provider} bind requires local sign-in, redirecting")
        return RedirectResponse(
            url=settings.sso.login_url, status_code=status.HTTP_302_FOUND
        )

    user = session.current_user
    response = RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
    _set_session_cookie(response, jwt_service.create_token(str(user.id), user.name), settings)
    response.delete_cookie(STATE_COOKIE, path="/sso")

    logger.info(f"SSO login via {provider} for {user.name}")
    return response


@router.get("/logout")
async def logout(
    request: Request,
    session_use_case: FromDishka[GetSessionUseCase],
    logout_use_case: FromDishka[LogoutUseCase],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Sign out and clear the session cookie."""
    session = await _session(request, settings, session_use_case)
    result = await logout_use_case.execute(session)

    response = RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
    response.delete_cookie(settings.session.cookie_name, path="/")
    return response


@router.get("/authorize")
async def authorize(
    client_id: str,
    redirect_uri: str,
    request: Request,
    session_use_case: FromDishka[GetSessionUseCase],
    authorize_use_case: FromDishka[AuthorizeUseCase],
    settings: FromDishka[Settings],
    state: str | None = None,
) -> RedirectResponse:
    """Issue an authorization code to a registered downstream application.

    An unregistered client or redirect URI gets 400 and no redirect.
    Anonymous callers are sent to the local login page first.
    """
    authorize_request = AuthorizeRequest(
        client_id=client_id, redirect_uri=redirect_uri, state=state
    )
    authorize_use_case.check(authorize_request)

    session = await _session(request, settings, session_use_case)
    if session.current_user is None:
        return RedirectResponse(
            url=settings.sso.login_url, status_code=status.HTTP_302_FOUND
        )

    result = await authorize_use_case.execute(authorize_request, session.current_user)
    return RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)


@router.api_route(
    "/access_token", methods=["GET", "POST"], response_model=GetAccessTokenResponse
)
async def access_token(
    code: str,
    client_id: str,
    client_secret: str,
    access_token_use_case: FromDishka[GetAccessTokenUseCase],
    redirect_uri: str | None = None,
) -> GetAccessTokenResponse:
    """Exchange an authorization code for an access token.

    Example:
        GET /sso/access_token?code=...&client_id=wiki&client_secret=...

        {"access_token": "...", "expires_in": 7200, "scope": "basic,UserInfo"}
    """
    return await access_token_use_case.execute(
        GetAccessTokenRequest(
            code=code,
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
        )
    )


@router.get("/userinfo", response_model=ExtendedUserInfo | BasicUserInfo)
async def userinfo(
    user_info_use_case: FromDishka[GetUserInfoUseCase],
    access_token: str | None = None,
    authorization: str | None = Header(default=None),
) -> ExtendedUserInfo | BasicUserInfo:
    """Describe the user an access token belongs to.

    The token is read from ``access_token`` or a ``Bearer`` header.
    """
    token = access_token
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
    if not token:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "TokenError", "detail": "Missing access token"},
        )

    return await user_info_use_case.execute(GetUserInfoRequest(access_token=token))


@router.get("/avatar/{user_id}")
async def avatar(
    user_id: UUID,
    avatar_service: FromDishka[AvatarService],
) -> FileResponse:
    """Serve a cached avatar image."""
    path = avatar_service.cache_path(UserId(user_id))
    if path is None or not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No cached avatar")
    return FileResponse(path)
