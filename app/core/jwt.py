from jose import jwt, JWTError
from app.core.config import settings


def decode_access_token(token: str):
    options = {"verify_aud": settings.AUTH_AUDIENCE is not None}

    try:
        payload = jwt.decode(
            token,
            settings.AUTH_SECRET_KEY,
            algorithms=[settings.AUTH_ALGORITHM],
            audience=settings.AUTH_AUDIENCE,
            issuer=settings.AUTH_ISSUER,
            options=options,
        )
    except JWTError:
        return None

    # Tokens without a subject carry no identity
    if not payload.get("sub"):
        return None

    return payload
