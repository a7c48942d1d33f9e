"""Password hashing and the JWT used for both the bearer header and the
``admin_session`` cookie."""
from datetime import timedelta
from jose import JWTError, jwt
import bcrypt
from catalog_admin.core.config import settings
from catalog_admin.core.time import utc_now


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login or change-password attempt. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _registered_claims() -> dict:
    claims = {}
    if settings.JWT_ISSUER:
        claims["iss"] = settings.JWT_ISSUER
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    return claims


def create_access_token(data: dict) -> str:
    """Sign a session token.

    ``data`` carries ``sub`` (the user id) plus the email and role claims.
    The lifetime matches the session cookie's max age.
    """
    claims = {
        **data,
        **_registered_claims(),
        "exp": utc_now() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Claims of a valid session token, or None if it is invalid or expired."""
    expected = _registered_claims()
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=expected.get("aud"),
            issuer=expected.get("iss"),
            options={"verify_aud": "aud" in expected, "verify_iss": "iss" in expected},
        )
    except JWTError:
        return None
