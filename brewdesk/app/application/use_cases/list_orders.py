from __future__ import annotations

from dataclasses import dataclass, field

from brewdesk.app.domain.models.operation_result import OperationResult
from brewdesk.app.domain.models.records import OrderView
from brewdesk.app.infrastructure.logging.logger import get_logger, log_action
from brewdesk.app.ui.filters import clean_filters
from brewdesk.app.ui.pagination import PaginationState, goto_page, next_page, prev_page, total_pages_for
from brewdesk.clients.cafe_api_sdk.errors import ApiError
from brewdesk.clients.cafe_api_sdk.models import OrderPage
from brewdesk.clients.cafe_api_sdk.modules.orders_client import OrdersClient

logger = get_logger(__name__)


@dataclass
class OrderFilters:
    search: str = ""
    status: str = "all"
    branch: int | None = None


@dataclass
class ListOrdersUseCase:
    """Server-paginated order listing; ``retry`` re-runs the last query unchanged."""

    orders_client: OrdersClient
    pagination: PaginationState = field(default_factory=PaginationState)
    filters: OrderFilters = field(default_factory=OrderFilters)
    orders: list[OrderView] = field(default_factory=list)
    total_pages: int = 1
    last_error: ApiError | None = None

    def execute(self) -> OperationResult[OrderPage]:
        query = clean_filters(
            {"search": self.filters.search.strip(), "status": self.filters.status, "branch": self.filters.branch}
        )
        try:
            page = self.orders_client.list_orders(
                page=self.pagination.page,
                page_size=self.pagination.page_size,
                **query,
            )
        except ApiError as error:
            self.last_error = error
            log_action(logger, "orders", "list", "failure", page=self.pagination.page, kind=error.kind.value)
            return OperationResult.failure(error)

        self.last_error = None
        self.orders[:] = [OrderView.from_record(record) for record in page.orders]
        self.total_pages = total_pages_for(page.count, self.pagination.page_size)
        log_action(logger, "orders", "list", "success", page=self.pagination.page, count=page.count)
        return OperationResult.success(page)

    def retry(self) -> OperationResult[OrderPage]:
        return self.execute()

    def search(self, text: str) -> OperationResult[OrderPage]:
        self.filters.search = text
        self.pagination.page = 1
        return self.execute()

    def filter_status(self, status: str) -> OperationResult[OrderPage]:
        self.filters.status = status
        self.pagination.page = 1
        return self.execute()

    def next(self) -> OperationResult[OrderPage]:
        next_page(self.pagination, self.total_pages)
        return self.execute()

    def previous(self) -> OperationResult[OrderPage]:
        prev_page(self.pagination)
        return self.execute()

    def goto(self, page: int) -> OperationResult[OrderPage]:
        goto_page(self.pagination, page, self.total_pages)
        return self.execute()
