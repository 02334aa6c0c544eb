# backend/app/utils/auth.py — Validación del access token de Supabase Auth
from __future__ import annotations

import logging

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer

from app.core.settings import settings

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def bearer_token(credentials=Depends(security)) -> str:
    if not credentials or not credentials.credentials:
        logger.info("🚫 Auth: Missing Authorization header")
        raise _unauthorized("Missing Authorization header")
    return credentials.credentials.strip()


def decode_access_token(token: str) -> dict:
    """
    Decodifica el JWT emitido por Supabase Auth (HS256, secreto del proyecto).
    No se verifica audience: Supabase usa "authenticated".
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[ALGORITHM],
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_aud": False,
            },
        )
    except jwt.ExpiredSignatureError:
        logger.info("🚫 Auth: Token expired")
        raise _unauthorized("Token expired")
    except jwt.InvalidSignatureError:
        logger.error("🚫 Auth: Invalid token signature")
        raise _unauthorized("Invalid token signature")
    except jwt.DecodeError as e:
        logger.error(f"🚫 Auth: Token decode error: {e}")
        raise _unauthorized("Invalid token format")
    except jwt.InvalidTokenError as e:
        logger.error(f"🚫 Auth: Invalid token: {e}")
        raise _unauthorized("Invalid token")


def require_user(token: str = Depends(bearer_token)) -> str:
    """
    Extrae y valida el JWT, devuelve el user_id (claim 'sub').
    """
    payload = decode_access_token(token)

    user_id = str(payload.get("sub") or "").strip()
    if not user_id:
        logger.error(f"🚫 Auth: Missing 'sub' claim in token. Payload: {list(payload.keys())}")
        raise _unauthorized("Invalid token payload - missing user ID")

    logger.debug(f"✅ Auth success: user_id={user_id[:8]}... email={payload.get('email', 'unknown')}")
    return user_id
