# backend/app/services/client_repository.py
"""
Acceso a la tabla `clients` de Supabase.

Única pieza que escribe en el backend. Cualquier fallo (red, auth,
restricción, fila inexistente) sale como BackendError.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import ValidationError
from supabase import Client as SupabaseClient

from app.models.client import Client, ClientFormData
from app.utils.errors import BackendError

logger = logging.getLogger(__name__)

TABLE = "clients"


def _error_detail(exc: Exception) -> str:
    # postgrest.APIError expone .message; el resto usa args
    return getattr(exc, "message", None) or (str(exc.args[0]) if exc.args else str(exc))


def _check_response(res: Any, operation: str) -> None:
    # versiones antiguas de supabase-py devuelven el error en la respuesta
    error = getattr(res, "error", None)
    if error:
        detail = getattr(error, "message", str(error))
        raise BackendError(detail, operation)


class ClientRepository:
    def __init__(self, supabase: SupabaseClient, table: str = TABLE):
        self.supabase = supabase
        self.table = table

    def list_all(self) -> List[Client]:
        """Todos los clientes, más recientes primero (created_at desc)."""
        logger.debug("list_all on %s", self.table)
        try:
            res = (
                self.supabase.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            _check_response(res, "list")
            return [Client.model_validate(row) for row in (res.data or [])]
        except BackendError:
            raise
        except ValidationError as e:
            logger.error("list_all: fila de cliente inválida: %s", e)
            raise BackendError("Respuesta inválida del servidor", "list") from e
        except Exception as e:
            detail = _error_detail(e)
            logger.error("list_all: %s", detail)
            raise BackendError(detail, "list") from e

    def create(self, data: ClientFormData, actor: Optional[str]) -> Client:
        record = data.to_record()
        record["created_by"] = actor
        logger.debug("create on %s by %s", self.table, actor)
        try:
            res = self.supabase.table(self.table).insert(record).execute()
            _check_response(res, "create")
            if not res.data:
                raise BackendError("No se pudo crear el cliente", "create")
            return Client.model_validate(res.data[0])
        except BackendError as e:
            logger.error("create: %s", e.message)
            raise
        except Exception as e:
            detail = _error_detail(e)
            logger.error("create: %s", detail)
            raise BackendError(detail, "create") from e

    def update(self, client_id: str, data: ClientFormData) -> None:
        record = data.to_record()
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        logger.debug("update %s on %s", client_id, self.table)
        try:
            res = (
                self.supabase.table(self.table)
                .update(record)
                .eq("id", client_id)
                .execute()
            )
            _check_response(res, "update")
            if not res.data:
                raise BackendError("Cliente no encontrado", "update")
        except BackendError as e:
            logger.error("update %s: %s", client_id, e.message)
            raise
        except Exception as e:
            detail = _error_detail(e)
            logger.error("update %s: %s", client_id, detail)
            raise BackendError(detail, "update") from e

    def delete(self, client_id: str) -> None:
        logger.debug("delete %s on %s", client_id, self.table)
        try:
            res = (
                self.supabase.table(self.table)
                .delete()
                .eq("id", client_id)
                .execute()
            )
            _check_response(res, "delete")
        except BackendError as e:
            logger.error("delete %s: %s", client_id, e.message)
            raise
        except Exception as e:
            detail = _error_detail(e)
            logger.error("delete %s: %s", client_id, detail)
            raise BackendError(detail, "delete") from e
