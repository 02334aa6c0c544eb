# scripts/seed.py
# Propósito: Sembrar clientes de ejemplo en la tabla `clients` de Supabase.

import logging
import sys

from app.db.supabase import get_supabase
from app.models.client import ClientFormData

logger = logging.getLogger("seed")

# Idempotencia: ids fijos + upsert para evitar duplicados
CLIENTS = [
    ("11111111-1111-1111-1111-111111111111", ClientFormData(
        full_name="Ana Ruiz", email="ana.ruiz@example.com", phone="987654321",
        document_type="DNI", document_number="45678912", address="Av. Larco 123, Miraflores",
        service_type="Móvil", plan="Plan 39.90", status="Active", last_contact="2024-03-15",
    )),
    ("22222222-2222-2222-2222-222222222222", ClientFormData(
        full_name="Beto Lopez", phone="912345678",
        document_type="CE", document_number="001234567",
        service_type="TV Cable", status="Suspended", notes="Deuda pendiente",
    )),
    ("33333333-3333-3333-3333-333333333333", ClientFormData(
        full_name="Comercial Andina SAC", email="contacto@andina.pe", phone="014567890",
        document_type="RUC", document_number="20512345678",
        service_type="Paquete Trio", plan="Empresas 200", status="Active",
    )),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    supabase = get_supabase()

    try:
        for client_id, form in CLIENTS:
            form.validate_fields()
            row = form.to_record()
            row["id"] = client_id
            supabase.table("clients").upsert(row, on_conflict="id").execute()
            logger.info("✅ %s", form.full_name)

        logger.info("✅ Seed completado con éxito (%d clientes).", len(CLIENTS))
    except Exception as e:
        logger.error("❌ Error en seed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
