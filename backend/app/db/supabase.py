# supabase.py - Inicialización del cliente Supabase con validación de tipos
# Se asegura que las variables de entorno de URL y KEY sean cadenas simples

from functools import lru_cache

from supabase import create_client, Client
from supabase.client import ClientOptions

from app.core.settings import settings


def _url() -> str:
    # AnyHttpUrl añade "/" final; supabase-py espera la URL base sin él
    return str(settings.SUPABASE_URL).rstrip("/")


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Instancia única de Supabase Client para las tablas, creada en el primer uso."""
    return create_client(_url(), settings.SUPABASE_KEY)


def get_auth_client():
    """
    Cliente de Supabase Auth nuevo por petición: la sesión de un login
    no debe quedar guardada en el cliente compartido.
    """
    options = ClientOptions(auto_refresh_token=False, persist_session=False)
    return create_client(_url(), settings.SUPABASE_KEY, options=options).auth
