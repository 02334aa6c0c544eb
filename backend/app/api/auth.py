# backend/app/api/auth.py
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from app.core.auth_context import AuthContext
from app.db.supabase import get_auth_client
from app.utils.auth import bearer_token
from app.utils.errors import AuthError

router = APIRouter()
__all__ = ["router"]


# -------- Modelos --------
class LoginRequest(BaseModel):
    email: str
    password: str


# -------- Endpoints --------
@router.post("/login")
def login(request_body: LoginRequest, auth=Depends(get_auth_client)):
    """
    Login por email + password contra Supabase Auth: devuelve el access_token
    de la sesión, que el frontend envía como Bearer.
    """
    ctx = AuthContext(auth)
    try:
        session = ctx.sign_in(request_body.email, request_body.password)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_in": session.expires_in,
        "token_type": session.token_type,
        "user": asdict(session.user),
    }


@router.get("/me")
def me(token: str = Depends(bearer_token), auth=Depends(get_auth_client)):
    """
    Lee Authorization: Bearer <token> y lo resuelve contra Supabase Auth.
    """
    ctx = AuthContext(auth)
    user = ctx.init(token)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sesión no válida")
    return {"user": asdict(user), "token_valid": True}


@router.post("/logout", status_code=204)
def logout(token: str = Depends(bearer_token), auth=Depends(get_auth_client)):
    ctx = AuthContext(auth)
    ctx.init(token)
    ctx.sign_out()
    return Response(status_code=204)
