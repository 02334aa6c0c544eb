# backend/app/core/auth_context.py
"""
Contexto de autenticación sobre Supabase Auth.

Guarda el usuario actual (o None) y un flag `loading` mientras se resuelve
la sesión. Se inicia explícitamente con init() y se cierra con sign_out(),
que siempre limpia la identidad aunque el proveedor falle.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from app.utils.errors import AuthError

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None


@dataclass
class AuthSession:
    access_token: str
    user: AuthUser
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"


def _to_user(raw: Any) -> Optional[AuthUser]:
    if raw is None:
        return None
    return AuthUser(id=str(raw.id), email=getattr(raw, "email", None))


class AuthContext:
    def __init__(self, auth: Any):
        # auth: cliente de Supabase Auth (supabase.auth)
        self.auth = auth
        self.user: Optional[AuthUser] = None
        self.loading = False
        self._access_token: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def init(self, access_token: Optional[str] = None) -> Optional[AuthUser]:
        """Resuelve la sesión (con el token dado o la guardada en el cliente)."""
        self.loading = True
        try:
            res = self.auth.get_user(access_token) if access_token else self.auth.get_user()
            self.user = _to_user(getattr(res, "user", None)) if res else None
        except Exception as e:
            logger.warning("No se pudo resolver la sesión: %s", e)
            self.user = None
        finally:
            self.loading = False
        self._access_token = access_token if self.user else None
        return self.user

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            res = self.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.info("Login rechazado para %s: %s", email, e)
            raise AuthError("Credenciales inválidas") from e

        user = _to_user(getattr(res, "user", None))
        session = getattr(res, "session", None)
        if user is None or session is None:
            raise AuthError("Credenciales inválidas")

        self.user = user
        self._access_token = session.access_token
        return AuthSession(
            access_token=session.access_token,
            refresh_token=getattr(session, "refresh_token", None),
            expires_in=getattr(session, "expires_in", None),
            user=user,
        )

    def sign_out(self) -> None:
        """Revoca el token resuelto (si lo hay) y limpia la identidad."""
        try:
            if self._access_token:
                self.auth.admin.sign_out(self._access_token)
            else:
                self.auth.sign_out()
        except Exception as e:
            logger.warning("sign_out falló en el proveedor: %s", e)
        finally:
            self.user = None
            self._access_token = None
