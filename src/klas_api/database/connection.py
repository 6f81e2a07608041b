from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from supabase import Client, create_client

from ..core.exceptions import ConfigurationError


@dataclass
class SupabaseConfig:
    url: str
    anon_key: str
    service_role_key: str


class SupabaseConnection:
    """Singleton-like Supabase client factory.

    Two clients are kept: `client` uses the anon key (row level security
    applies), `admin` uses the service role key. Both are created lazily on
    first use so the app can start without network access.
    """

    _instance: Optional["SupabaseConnection"] = None

    def __init__(self, config: SupabaseConfig):
        self._config = config
        self._client: Optional[Client] = None
        self._admin: Optional[Client] = None

    @classmethod
    def get_instance(cls, config: SupabaseConfig) -> "SupabaseConnection":
        if cls._instance is None:
            cls._instance = SupabaseConnection(config)
        return cls._instance

    def client(self) -> Client:
        if self._client is None:
            self._client = self._create(self._config.anon_key, "SUPABASE_ANON_KEY")
        return self._client

    def admin(self) -> Client:
        if self._admin is None:
            self._admin = self._create(self._config.service_role_key, "SUPABASE_SERVICE_ROLE_KEY")
        return self._admin

    def _create(self, key: str, key_name: str) -> Client:
        if not self._config.url or not key:
            raise ConfigurationError(f"SUPABASE_URL and {key_name} must be configured")
        return create_client(self._config.url, key)
