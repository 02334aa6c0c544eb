# backend/app/services/presentation.py
# Datos de vista para tarjetas y listado (el front solo pinta).

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from app.models.client import Client, ClientStatus
from app.services.filters import FilterCriteria

STATUS_LABELS = {
    ClientStatus.ACTIVE: "Activo",
    ClientStatus.INACTIVE: "Inactivo",
    ClientStatus.SUSPENDED: "Suspendido",
}

DELETE_CONFIRM_MESSAGE = "¿Está seguro de eliminar este cliente?"


def status_label(status: ClientStatus) -> str:
    return STATUS_LABELS.get(status, str(status))


def format_last_contact(value: Optional[str]) -> Optional[str]:
    """Fecha en formato es-PE (dd/mm/aaaa); None si no hay o no se entiende."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.strftime("%d/%m/%Y")


def summary_text(count: int) -> str:
    if count == 1:
        return "1 cliente encontrado"
    return f"{count} clientes encontrados"


def empty_message(criteria: FilterCriteria) -> str:
    if criteria.is_active:
        return "Intenta ajustar los filtros de búsqueda"
    return "Comienza agregando tu primer cliente"


def card_view(client: Client) -> Dict[str, Any]:
    data = client.model_dump(mode="json")
    data["status_label"] = status_label(client.status)
    data["last_contact_display"] = format_last_contact(client.last_contact)
    return data
