# backend/app/models/client.py - Schemas Pydantic para Cliente y su formulario

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.utils.errors import FormValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Campos que el formulario exige rellenos
REQUIRED_FIELDS = (
    "full_name",
    "document_type",
    "document_number",
    "phone",
    "service_type",
    "status",
)

# Campos opcionales: "" en el formulario, null en la base de datos
NULLABLE_FIELDS = ("email", "address", "plan", "last_contact")


def _is_iso_date(value: str) -> bool:
    if not DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


class ClientStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"


class ServiceType(str, Enum):
    MOBILE = "Móvil"
    HOME_INTERNET = "Internet Hogar"
    CABLE_TV = "TV Cable"
    DUO_BUNDLE = "Paquete Duo"
    TRIO_BUNDLE = "Paquete Trio"


class DocumentType(str, Enum):
    DNI = "DNI"
    CE = "CE"
    PASAPORTE = "Pasaporte"
    RUC = "RUC"


DOCUMENT_TYPE_LABELS = {
    DocumentType.DNI: "DNI",
    DocumentType.CE: "Carnet de Extranjería",
    DocumentType.PASAPORTE: "Pasaporte",
    DocumentType.RUC: "RUC",
}


class Client(BaseModel):
    """Fila de la tabla `clients` tal como la devuelve Supabase."""

    id: str
    full_name: str
    email: Optional[str] = None
    phone: str
    document_type: str
    document_number: str
    address: Optional[str] = None
    service_type: str
    plan: Optional[str] = None
    status: ClientStatus
    registration_date: Optional[str] = None
    last_contact: Optional[str] = None
    notes: str = ""
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @field_validator("id", "created_by", mode="before")
    @classmethod
    def _uuid_as_str(cls, v: Any) -> Any:
        return str(v) if v is not None else None

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, v: Any) -> Any:
        return "" if v is None else v


class ClientFormData(BaseModel):
    """
    Proyección editable de Client: todo son strings, "" significa vacío.
    Se crea en blanco para "nuevo" o desde un Client para "editar".
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    document_type: str = DocumentType.DNI.value
    document_number: str = ""
    address: str = ""
    service_type: str = ""
    plan: str = ""
    status: str = ClientStatus.ACTIVE.value
    last_contact: str = ""
    notes: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        # los inputs de formulario no pueden contener null
        if v is None:
            return ""
        if isinstance(v, Enum):
            return v.value
        return v

    @classmethod
    def blank(cls) -> "ClientFormData":
        return cls()

    @classmethod
    def from_client(cls, client: Client) -> "ClientFormData":
        return cls(
            full_name=client.full_name,
            email=client.email or "",
            phone=client.phone,
            document_type=client.document_type,
            document_number=client.document_number,
            address=client.address or "",
            service_type=client.service_type,
            plan=client.plan or "",
            status=client.status.value,
            last_contact=client.last_contact.split("T")[0] if client.last_contact else "",
            notes=client.notes,
        )

    def validate_fields(self) -> None:
        """Lanza FormValidationError con todos los campos incorrectos."""
        errors: Dict[str, str] = {}

        for name in REQUIRED_FIELDS:
            if not getattr(self, name).strip():
                errors[name] = "Campo obligatorio"

        if "document_type" not in errors and self.document_type not in {d.value for d in DocumentType}:
            errors["document_type"] = "Tipo de documento no válido"
        if "service_type" not in errors and self.service_type not in {s.value for s in ServiceType}:
            errors["service_type"] = "Tipo de servicio no válido"
        if "status" not in errors and self.status not in {s.value for s in ClientStatus}:
            errors["status"] = "Estado no válido"

        if self.email.strip() and not EMAIL_RE.match(self.email.strip()):
            errors["email"] = "Email inválido"

        if self.last_contact and not _is_iso_date(self.last_contact):
            errors["last_contact"] = "Fecha inválida (AAAA-MM-DD)"

        if errors:
            raise FormValidationError(errors)

    def to_record(self) -> Dict[str, Any]:
        """Payload para Supabase: los opcionales vacíos viajan como null."""
        data = self.model_dump()
        for name in NULLABLE_FIELDS:
            if not data[name]:
                data[name] = None
        return data
