# backend/app/services/client_list.py
"""
Estado del listado de clientes y del modal de alta/edición.

ClientList carga la tabla completa, mantiene la vista filtrada y secuencia
guardar/borrar -> recarga completa. Nunca parchea la lista en local: tras
cada mutación correcta se vuelve a pedir todo al backend.

Estados:  LOADING -> READY
Modos (en READY):  BROWSING | EDITING (cliente existente) | CREATING (en blanco)
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from app.models.client import Client, ClientFormData
from app.services.filters import ALL, FilterCriteria, apply_criteria
from app.services.presentation import (
    DELETE_CONFIRM_MESSAGE,
    card_view,
    empty_message,
    summary_text,
)
from app.utils.errors import BackendError

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


class Repository(Protocol):
    def list_all(self) -> List[Client]: ...
    def create(self, data: ClientFormData, actor: Optional[str]) -> Client: ...
    def update(self, client_id: str, data: ClientFormData) -> None: ...
    def delete(self, client_id: str) -> None: ...


class ListState(str, Enum):
    LOADING = "loading"
    READY = "ready"


class Mode(str, Enum):
    BROWSING = "browsing"
    EDITING = "editing"
    CREATING = "creating"


class InvalidTransition(RuntimeError):
    pass


def _unique_by_id(clients: List[Client]) -> List[Client]:
    seen = set()
    unique = []
    for client in clients:
        if client.id in seen:
            logger.warning("Cliente duplicado en la respuesta: %s", client.id)
            continue
        seen.add(client.id)
        unique.append(client)
    return unique


class ClientList:
    def __init__(
        self,
        repository: Repository,
        user_id: Optional[str] = None,
        confirm: Optional[ConfirmFn] = None,
    ):
        self.repository = repository
        self.user_id = user_id
        self.confirm: ConfirmFn = confirm or (lambda message: False)

        self.state = ListState.LOADING
        self.mode = Mode.BROWSING
        self.clients: List[Client] = []
        self.filtered: List[Client] = []
        self.criteria = FilterCriteria()

        self.selected: Optional[Client] = None
        self.form: Optional[ClientFormData] = None
        self.saving = False
        self.load_error: Optional[BackendError] = None

    # ---------- Carga y filtros ----------
    @property
    def loading(self) -> bool:
        return self.state is ListState.LOADING

    @property
    def show_modal(self) -> bool:
        return self.mode is not Mode.BROWSING

    def load(self) -> List[Client]:
        """Recarga completa. Si falla se queda con la lista anterior y guarda el error en load_error."""
        try:
            self.clients = _unique_by_id(self.repository.list_all())
            self.load_error = None
        except BackendError as e:
            logger.error("Error loading clients: %s", e.message)
            self.load_error = e
        finally:
            self.state = ListState.READY
        self._refilter()
        return self.filtered

    def set_filters(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        service: Optional[str] = None,
    ) -> List[Client]:
        self.criteria = FilterCriteria(
            search=self.criteria.search if search is None else search,
            status=self.criteria.status if status is None else (status or ALL),
            service=self.criteria.service if service is None else (service or ALL),
        )
        self._refilter()
        return self.filtered

    def _refilter(self) -> None:
        self.filtered = apply_criteria(self.clients, self.criteria)

    def find(self, client_id: str) -> Optional[Client]:
        return next((c for c in self.clients if c.id == client_id), None)

    # ---------- Modal ----------
    def _require_browsing(self, action: str) -> None:
        if self.mode is not Mode.BROWSING:
            raise InvalidTransition(f"No se puede {action} con el formulario abierto")

    def open_create(self) -> ClientFormData:
        self._require_browsing("crear")
        self.selected = None
        self.form = ClientFormData.blank()
        self.mode = Mode.CREATING
        return self.form

    def open_edit(self, client: Union[Client, str]) -> ClientFormData:
        self._require_browsing("editar")
        if isinstance(client, str):
            found = self.find(client)
            if found is None:
                raise KeyError(client)
            client = found
        self.selected = client
        self.form = ClientFormData.from_client(client)
        self.mode = Mode.EDITING
        return self.form

    def cancel(self) -> None:
        self._close_modal()

    def _close_modal(self) -> None:
        self.mode = Mode.BROWSING
        self.selected = None
        self.form = None
        self.saving = False

    def save(self, form: Optional[ClientFormData] = None) -> Optional[Client]:
        """
        Crea o actualiza según el modo y recarga la lista.
        En CREATING devuelve el cliente creado; en EDITING devuelve None.
        Un BackendError deja el modal abierto, saving=False y se relanza.
        """
        if self.mode is Mode.BROWSING:
            raise InvalidTransition("No hay formulario abierto")

        form = form if form is not None else self.form
        self.form = form
        form.validate_fields()
        self.saving = True

        created: Optional[Client] = None
        try:
            if self.mode is Mode.EDITING:
                self.repository.update(self.selected.id, form)
            else:
                created = self.repository.create(form, self.user_id)
        except BackendError as e:
            logger.error("Error saving client: %s", e.message)
            self.saving = False
            raise

        self.load()
        self._close_modal()
        return created

    # ---------- Borrado ----------
    def delete(self, client_id: str) -> bool:
        if not self.confirm(DELETE_CONFIRM_MESSAGE):
            return False

        try:
            self.repository.delete(client_id)
        except BackendError as e:
            logger.error("Error deleting client: %s", e.message)
            return False

        self.load()
        return True

    # ---------- Vista ----------
    def snapshot(self) -> Dict[str, Any]:
        count = len(self.filtered)
        return {
            "clients": [card_view(c) for c in self.filtered],
            "count": count,
            "total": len(self.clients),
            "summary": summary_text(count),
            "empty_message": empty_message(self.criteria) if count == 0 else None,
            "filters": {
                "search": self.criteria.search,
                "status": self.criteria.status,
                "service": self.criteria.service,
            },
        }
