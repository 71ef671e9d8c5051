"""
Application context: one explicitly built container per process.

Everything that needs the session gets it from here instead of a module
global, so tests can build as many isolated contexts as they like.
"""

from dataclasses import dataclass, field
from typing import Optional

import httpx

from propdesk.api import (
    AdminAPI,
    ApiClient,
    ApplicationsAPI,
    AuthAPI,
    ChatAPI,
    ContactAPI,
    HealthAPI,
    OwnerAPI,
    PropertiesAPI,
    RentPaymentsAPI,
    TenantAPI,
    ViewingsAPI,
)
from propdesk.config import ClientConfig
from propdesk.navigation import HOME_PATH, Navigator
from propdesk.session import (
    AuthSession,
    FileStorage,
    HydrationCoordinator,
    PersistedStore,
)
from propdesk.session.store import Storage


@dataclass
class AppContext:
    config: ClientConfig
    store: PersistedStore
    session: AuthSession
    hydration: HydrationCoordinator
    navigator: Navigator
    client: ApiClient
    apis: dict = field(default_factory=dict)

    @property
    def auth_api(self) -> AuthAPI:
        return self.apis["auth"]

    @property
    def properties_api(self) -> PropertiesAPI:
        return self.apis["properties"]

    @property
    def applications_api(self) -> ApplicationsAPI:
        return self.apis["applications"]

    @property
    def viewings_api(self) -> ViewingsAPI:
        return self.apis["viewings"]

    @property
    def chat_api(self) -> ChatAPI:
        return self.apis["chat"]

    @property
    def contact_api(self) -> ContactAPI:
        return self.apis["contact"]

    @property
    def tenant_api(self) -> TenantAPI:
        return self.apis["tenant"]

    @property
    def owner_api(self) -> OwnerAPI:
        return self.apis["owner"]

    @property
    def admin_api(self) -> AdminAPI:
        return self.apis["admin"]

    @property
    def rent_payments_api(self) -> RentPaymentsAPI:
        return self.apis["rent_payments"]

    @property
    def health_api(self) -> HealthAPI:
        return self.apis["health"]

    def close(self) -> None:
        self.client.close()


def build_context(
    config: Optional[ClientConfig] = None,
    storage: Optional[Storage] = None,
    transport: Optional[httpx.BaseTransport] = None,
    current_path: str = HOME_PATH,
) -> AppContext:
    """Wire a fresh, un-hydrated context."""
    config = config or ClientConfig.from_env()
    storage = storage if storage is not None else FileStorage(config.storage_path)

    store = PersistedStore(storage, key=config.storage_key)
    session = AuthSession(
        store=store, persist_profile_updates=config.persist_profile_updates
    )
    navigator = Navigator(current_path)
    client = ApiClient(
        session,
        navigator,
        base_url=config.api_url,
        timeout=config.timeout,
        transport=transport,
    )

    apis = {
        "auth": AuthAPI(client),
        "properties": PropertiesAPI(client),
        "applications": ApplicationsAPI(client),
        "viewings": ViewingsAPI(client),
        "chat": ChatAPI(client),
        "contact": ContactAPI(client),
        "tenant": TenantAPI(client),
        "owner": OwnerAPI(client),
        "admin": AdminAPI(client),
        "rent_payments": RentPaymentsAPI(client),
        "health": HealthAPI(client, config.backend_url),
    }

    return AppContext(
        config=config,
        store=store,
        session=session,
        hydration=HydrationCoordinator(session, store),
        navigator=navigator,
        client=client,
        apis=apis,
    )
