# backend/app/services/filters.py
"""
Filtro de clientes en memoria: búsqueda libre + estado + tipo de servicio.

Funciones puras: no reordenan la lista de entrada ni tienen efectos
secundarios, así que se pueden recalcular en cada cambio de criterio.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from app.models.client import Client

ALL = "all"


@dataclass(frozen=True)
class FilterCriteria:
    search: str = ""
    status: str = ALL
    service: str = ALL

    @property
    def is_active(self) -> bool:
        return bool(self.search) or _restricts(self.status) or _restricts(self.service)


def _restricts(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def matches_search(client: Client, term: str) -> bool:
    # documento y teléfono se comparan sin pasar a minúsculas
    term = term.lower()
    return (
        term in client.full_name.lower()
        or term in client.document_number
        or term in client.phone
        or (bool(client.email) and term in client.email.lower())
    )


def filter_clients(
    records: Iterable[Client],
    search_term: Optional[str] = "",
    status_filter: Optional[str] = ALL,
    service_filter: Optional[str] = ALL,
) -> List[Client]:
    filtered = list(records)

    if search_term:
        filtered = [c for c in filtered if matches_search(c, search_term)]

    if _restricts(status_filter):
        filtered = [c for c in filtered if c.status == status_filter]

    if _restricts(service_filter):
        filtered = [c for c in filtered if c.service_type == service_filter]

    return filtered


def apply_criteria(records: Iterable[Client], criteria: FilterCriteria) -> List[Client]:
    return filter_clients(records, criteria.search, criteria.status, criteria.service)
