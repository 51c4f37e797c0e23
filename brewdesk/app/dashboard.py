from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from brewdesk.app.application.catalog_resolver import CatalogResolver
from brewdesk.app.application.crud_synchronizer import (
    CategorySynchronizer,
    CrudSynchronizer,
    ProductSynchronizer,
    SubCategorySynchronizer,
    branch_synchronizer,
    order_synchronizer,
    redeem_offer_synchronizer,
)
from brewdesk.app.application.state.catalog_state import Catalog, CatalogState
from brewdesk.app.application.state.session_state import SessionState
from brewdesk.app.application.use_cases.auth_flow import AuthFlowController
from brewdesk.app.application.use_cases.list_orders import ListOrdersUseCase
from brewdesk.app.config import AppConfig
from brewdesk.app.domain.models.operation_result import OperationResult
from brewdesk.app.ports import Navigator, Notifier, notify_quietly
from brewdesk.app.session_guard import SessionGuard
from brewdesk.app.ui.listing_view import ProductListing
from brewdesk.app.ui.pagination import PaginationState
from brewdesk.clients.cafe_api_sdk.http_client import HttpClient
from brewdesk.clients.cafe_api_sdk.modules.auth_client import AuthClient
from brewdesk.clients.cafe_api_sdk.modules.branches_client import BranchesClient
from brewdesk.clients.cafe_api_sdk.modules.catalog_client import CatalogClient
from brewdesk.clients.cafe_api_sdk.modules.favorites_client import FavoritesClient
from brewdesk.clients.cafe_api_sdk.modules.orders_client import OrdersClient
from brewdesk.clients.cafe_api_sdk.modules.redeems_client import RedeemsClient
from brewdesk.clients.cafe_api_sdk.session_store import FileSessionStore, SessionStore


@dataclass
class Dashboard:
    config: AppConfig
    session_store: SessionStore
    http: HttpClient
    navigator: Navigator
    notifier: Notifier
    guard: SessionGuard
    session: SessionState = field(default_factory=SessionState)
    catalog_state: CatalogState = field(default_factory=CatalogState)

    def __post_init__(self) -> None:
        self.auth_client = AuthClient(self.http)
        self.catalog_client = CatalogClient(self.http)
        self.branches_client = BranchesClient(self.http)
        self.orders_client = OrdersClient(self.http)
        self.favorites_client = FavoritesClient(self.http)
        self.redeems_client = RedeemsClient(self.http)
        self.resolver = CatalogResolver(self.catalog_client, self.catalog_state)
        self.listing = ProductListing(page_size=self.config.page_size)

    def auth_flow(self) -> AuthFlowController:
        return AuthFlowController(
            self.auth_client,
            self.session_store,
            self.navigator,
            self.notifier,
            login_path=self.config.login_path,
            dashboard_path=self.config.dashboard_path,
        )

    def refresh_products(self) -> OperationResult[Catalog]:
        result = self.resolver.resolve_catalog()
        if result.ok and result.value is not None and not result.value.stale:
            self._sync_listing()
        return result

    def products(self) -> ProductSynchronizer:
        return ProductSynchronizer(
            self.catalog_client,
            self.catalog_state,
            notifier=self.notifier,
            state=self.session,
            on_change=self._sync_listing,
        )

    def categories(self) -> CategorySynchronizer:
        return CategorySynchronizer(
            self.catalog_client,
            self.catalog_state,
            notifier=self.notifier,
            state=self.session,
            on_change=self._sync_listing,
        )

    def subcategories(self) -> SubCategorySynchronizer:
        return SubCategorySynchronizer(
            self.catalog_client,
            self.catalog_state,
            notifier=self.notifier,
            state=self.session,
            on_change=self._sync_listing,
        )

    def branches(self) -> CrudSynchronizer:
        return branch_synchronizer(self.branches_client, notifier=self.notifier, state=self.session)

    def orders(self) -> CrudSynchronizer:
        return order_synchronizer(self.orders_client, notifier=self.notifier, state=self.session)

    def redeem_offers(self) -> CrudSynchronizer:
        return redeem_offer_synchronizer(self.redeems_client, notifier=self.notifier, state=self.session)

    def order_listing(self) -> ListOrdersUseCase:
        return ListOrdersUseCase(self.orders_client, pagination=PaginationState(page_size=self.config.page_size))

    def close(self) -> None:
        self.http.close()

    def _sync_listing(self) -> None:
        self.listing.set_products(self.catalog_state.products)


def build_dashboard(
    navigator: Navigator,
    notifier: Notifier | None = None,
    *,
    config: AppConfig | None = None,
    session_store: SessionStore | None = None,
    client: httpx.Client | None = None,
) -> Dashboard:
    config = config or AppConfig.from_env()
    notifier = notifier or notify_quietly
    store = session_store or FileSessionStore(base_dir=config.session_dir)
    guard = SessionGuard(store, navigator, notifier, login_path=config.login_path)
    http = HttpClient(config=config.sdk, session_store=store, client=client, on_unauthorized=guard.handle_unauthorized)
    return Dashboard(
        config=config,
        session_store=store,
        http=http,
        navigator=navigator,
        notifier=notifier,
        guard=guard,
    )
