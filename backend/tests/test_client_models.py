# test_client_models.py - Pruebas de Client y ClientFormData

import uuid

import pytest

from conftest import make_client
from app.models.client import Client, ClientFormData, ClientStatus
from app.utils.errors import FormValidationError


def valid_form(**overrides):
    data = dict(
        full_name="Ana Ruiz",
        phone="987654321",
        document_type="DNI",
        document_number="45678912",
        service_type="Móvil",
        status="Active",
    )
    data.update(overrides)
    return ClientFormData(**data)


def test_blank_form_defaults():
    form = ClientFormData.blank()
    assert form.document_type == "DNI"
    assert form.status == "Active"
    assert form.full_name == ""
    assert form.last_contact == ""


def test_form_from_client_maps_nulls_to_empty_strings():
    client = make_client(email=None, address=None, plan=None, notes=None)
    form = ClientFormData.from_client(client)
    assert form.email == ""
    assert form.address == ""
    assert form.plan == ""
    assert form.notes == ""
    assert form.status == "Active"


def test_form_from_client_truncates_last_contact():
    client = make_client(last_contact="2024-03-15T00:00:00Z")
    assert ClientFormData.from_client(client).last_contact == "2024-03-15"


def test_to_record_normalizes_blank_optionals_to_none():
    record = valid_form().to_record()
    assert record["email"] is None
    assert record["address"] is None
    assert record["plan"] is None
    assert record["last_contact"] is None
    assert record["notes"] == ""
    assert record["full_name"] == "Ana Ruiz"
    assert record["status"] == "Active"


def test_to_record_keeps_filled_optionals():
    record = valid_form(email="ana@mail.com", plan="Plan 39.90", last_contact="2024-03-15").to_record()
    assert record["email"] == "ana@mail.com"
    assert record["plan"] == "Plan 39.90"
    assert record["last_contact"] == "2024-03-15"


def test_form_accepts_null_and_enum_input():
    form = ClientFormData(email=None, status=ClientStatus.SUSPENDED)
    assert form.email == ""
    assert form.status == "Suspended"


def test_valid_form_passes_validation():
    valid_form(email="ana@mail.com", last_contact="2024-03-15").validate_fields()


def test_blank_form_reports_every_required_field():
    with pytest.raises(FormValidationError) as exc:
        ClientFormData(document_type="", status="").validate_fields()
    assert set(exc.value.errors) == {
        "full_name", "document_type", "document_number", "phone", "service_type", "status",
    }


def test_whitespace_only_required_field_is_missing():
    with pytest.raises(FormValidationError) as exc:
        valid_form(full_name="   ").validate_fields()
    assert list(exc.value.errors) == ["full_name"]


@pytest.mark.parametrize("field, value", [
    ("email", "no-es-un-email"),
    ("service_type", "Satélite"),
    ("document_type", "Licencia"),
    ("status", "Deleted"),
    ("last_contact", "15/03/2024"),
    ("last_contact", "20240315"),
    ("last_contact", "2024-3-15"),
    ("last_contact", "2024-02-30"),
])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(FormValidationError) as exc:
        valid_form(**{field: value}).validate_fields()
    assert field in exc.value.errors


def test_client_reads_backend_row():
    row_id = uuid.uuid4()
    client = Client.model_validate({
        "id": row_id,
        "full_name": "Beto Lopez",
        "email": None,
        "phone": "912345678",
        "document_type": "CE",
        "document_number": "001234567",
        "address": None,
        "service_type": "TV Cable",
        "plan": None,
        "status": "Suspended",
        "registration_date": "2024-01-01T00:00:00+00:00",
        "last_contact": None,
        "notes": None,
        "created_by": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
        "extra_column": "ignored",
    })
    assert client.id == str(row_id)
    assert client.notes == ""
    assert client.status is ClientStatus.SUSPENDED
