from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.db.supabase import get_supabase
from app.models.client import (
    DOCUMENT_TYPE_LABELS,
    ClientFormData,
    ClientStatus,
    DocumentType,
    ServiceType,
)
from app.services.client_list import ClientList
from app.services.client_repository import ClientRepository
from app.services.filters import ALL
from app.services.presentation import STATUS_LABELS, card_view
from app.utils.auth import require_user
from app.utils.errors import BackendError

router = APIRouter()


def get_repository(supabase=Depends(get_supabase)) -> ClientRepository:
    return ClientRepository(supabase)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Cliente no encontrado")


def _require_loaded(view: ClientList) -> None:
    # sin lista no se distingue "no existe" de "backend caído"
    if view.load_error is not None:
        raise HTTPException(status_code=400, detail=view.load_error.message)


@router.get("/", response_model=dict)
def list_clients(
    q: Optional[str] = Query(None, description="Nombre, documento, teléfono o email"),
    status_filter: Optional[str] = Query(ALL, alias="status"),
    service_filter: Optional[str] = Query(ALL, alias="service"),
    user_id: str = Depends(require_user),
    repository: ClientRepository = Depends(get_repository),
):
    """
    GET /clients/?q=ana&status=Active&service=Móvil
    Carga la tabla completa y filtra en memoria. Si Supabase falla
    devolvemos la lista vacía para no romper el frontend.
    """
    view = ClientList(repository, user_id)
    view.load()
    view.set_filters(search=q or "", status=status_filter, service=service_filter)
    return view.snapshot()


@router.get("/options", response_model=dict)
def form_options(user_id: str = Depends(require_user)):
    """Valores de los desplegables de filtros y formulario."""
    return {
        "statuses": [{"value": s.value, "label": STATUS_LABELS[s]} for s in ClientStatus],
        "service_types": [s.value for s in ServiceType],
        "document_types": [
            {"value": d.value, "label": DOCUMENT_TYPE_LABELS[d]} for d in DocumentType
        ],
    }


@router.get("/new", response_model=dict)
def new_client_form(user_id: str = Depends(require_user)):
    return ClientFormData.blank().model_dump()


@router.get("/{client_id}/form", response_model=dict)
def edit_client_form(
    client_id: str,
    user_id: str = Depends(require_user),
    repository: ClientRepository = Depends(get_repository),
):
    """Formulario de edición pre-rellenado desde el cliente."""
    view = ClientList(repository, user_id)
    view.load()
    _require_loaded(view)
    try:
        form = view.open_edit(client_id)
    except KeyError:
        raise _not_found()
    return {"client": card_view(view.selected), "form": form.model_dump()}


@router.post("/", response_model=dict, status_code=201)
def create_client(
    payload: ClientFormData,
    user_id: str = Depends(require_user),
    repository: ClientRepository = Depends(get_repository),
):
    """
    Crea el cliente con created_by = usuario actual y devuelve la lista recargada.
    """
    view = ClientList(repository, user_id)
    view.open_create()
    try:
        created = view.save(payload)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message)

    snapshot = view.snapshot()
    snapshot["client"] = card_view(created)
    return snapshot


@router.put("/{client_id}", response_model=dict)
def update_client(
    client_id: str,
    payload: ClientFormData,
    user_id: str = Depends(require_user),
    repository: ClientRepository = Depends(get_repository),
):
    view = ClientList(repository, user_id)
    view.load()
    _require_loaded(view)
    try:
        view.open_edit(client_id)
    except KeyError:
        raise _not_found()

    try:
        view.save(payload)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return view.snapshot()


@router.delete("/{client_id}", response_model=dict)
def delete_client(
    client_id: str,
    confirm: bool = Query(False, description="Confirmación explícita del usuario"),
    user_id: str = Depends(require_user),
    repository: ClientRepository = Depends(get_repository),
):
    """
    Borra solo con ?confirm=true. Si el borrado falla la lista queda igual
    y se devuelve deleted=false.
    """
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail="¿Está seguro de eliminar este cliente? Repita con confirm=true",
        )

    view = ClientList(repository, user_id, confirm=lambda message: confirm)
    view.load()
    deleted = view.delete(client_id)

    snapshot = view.snapshot()
    snapshot["deleted"] = deleted
    return snapshot
