"""
Anonymous sessions carried by signed tokens

A sign-in issues a stable random user id wrapped in an HS256 token. The
token travels in a cookie for browsers or as a Bearer header for API
clients; no server-side session store is needed.
"""
import calendar
import uuid
from typing import Optional, Tuple
from datetime import datetime, timedelta
from fastapi import Request, Response, HTTPException, status
from jose import jwt, JWTError

from ..utils.logger import setup_logger
from ..models.auth import AnonymousIdentity, AuthStatus

logger = setup_logger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_ISSUER = "aramiyot"


class SessionManager:
    """Issues and verifies anonymous session tokens"""

    def __init__(self, secret_key: str, session_timeout: int, cookie_secure: bool = False):
        self.secret_key = secret_key
        self.session_timeout = session_timeout
        self.cookie_name = "aramiyot_session"
        self.cookie_secure = cookie_secure
        self.cookie_httponly = True
        self.cookie_samesite = "lax"

        logger.debug(f"SessionManager initialized: timeout={session_timeout}s, secure={cookie_secure}")

    def issue_token(self, user_id: Optional[str] = None) -> Tuple[str, AnonymousIdentity]:
        """
        Create a signed token for an anonymous user

        Args:
            user_id: Existing anonymous id to renew; a new one is generated when omitted

        Returns:
            Tuple of (token, identity)
        """
        now = datetime.utcnow()
        identity = AnonymousIdentity(
            user_id=user_id or f"anon-{uuid.uuid4().hex}",
            issued_at=now,
            expires_at=now + timedelta(seconds=self.session_timeout),
        )
        claims = {
            "sub": identity.user_id,
            "iss": TOKEN_ISSUER,
            "iat": calendar.timegm(identity.issued_at.utctimetuple()),
            "exp": calendar.timegm(identity.expires_at.utctimetuple()),
            "anonymous": True,
        }
        token = jwt.encode(claims, self.secret_key, algorithm=TOKEN_ALGORITHM)

        logger.info(f"Issued anonymous session for user: {identity.user_id}")
        return token, identity

    def verify_token(self, token: str) -> Optional[AnonymousIdentity]:
        """
        Verify a session token

        Returns:
            Optional[AnonymousIdentity]: Identity, or None if the token is invalid or expired
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[TOKEN_ALGORITHM],
                issuer=TOKEN_ISSUER,
            )
        except JWTError as e:
            logger.debug(f"Rejected session token: {e}")
            return None

        if not claims.get("sub"):
            return None

        return AnonymousIdentity(
            user_id=claims["sub"],
            issued_at=datetime.utcfromtimestamp(claims.get("iat", 0)),
            expires_at=datetime.utcfromtimestamp(claims["exp"]),
            is_anonymous=bool(claims.get("anonymous", True)),
        )

    def set_session_cookie(self, response: Response, token: str):
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.session_timeout,
            httponly=self.cookie_httponly,
            secure=self.cookie_secure,
            samesite=self.cookie_samesite,
            path="/",
        )

    def clear_session_cookie(self, response: Response):
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.cookie_secure,
            httponly=self.cookie_httponly,
            samesite=self.cookie_samesite
        )

    def get_identity_from_request(self, request: Request) -> Optional[AnonymousIdentity]:
        """
        Resolve the caller's identity from the session cookie, then the Authorization header

        Args:
            request: FastAPI request object

        Returns:
            Optional[AnonymousIdentity]: Identity or None
        """
        token = request.cookies.get(self.cookie_name)
        if token:
            identity = self.verify_token(token)
            if identity:
                return identity
            logger.debug("Session cookie present but invalid")

        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            return self.verify_token(auth_header[7:])

        return None

    def get_auth_status(self, request: Request) -> AuthStatus:
        identity = self.get_identity_from_request(request)

        if not identity:
            return AuthStatus(is_authenticated=False)

        return AuthStatus(
            is_authenticated=True,
            user_id=identity.user_id,
            is_anonymous=identity.is_anonymous,
            session_expires_at=identity.expires_at
        )


def get_session_manager(request: Request) -> SessionManager:
    """Dependency returning the application's session manager"""
    return request.app.state.session_manager


def require_user_id(request: Request) -> str:
    """
    Dependency to require a signed-in (anonymous) user

    Raises:
        HTTPException: 401 if there is no valid session
    """
    identity = get_session_manager(request).get_identity_from_request(request)

    if not identity:
        logger.warning(f"Authentication failed for {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return identity.user_id
