from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, Protocol, TypeVar

from brewdesk.app.application.catalog_mapping import is_dangling, raw_to_view_model
from brewdesk.app.application.mutation_attempts import begin_mutation, end_mutation, mutation_key
from brewdesk.app.application.state.catalog_state import CatalogState
from brewdesk.app.application.state.session_state import SessionState
from brewdesk.app.domain.models.catalog import Category, ProductView, SubCategory
from brewdesk.app.domain.models.operation_result import OperationResult
from brewdesk.app.domain.models.records import BranchView, OrderView, RedeemOfferView
from brewdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from brewdesk.app.infrastructure.logging.logger import get_logger, log_action
from brewdesk.app.ports import Notifier, notify_quietly
from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.models import CategoryRecord, ProductRecord, SubCategoryRecord
from brewdesk.clients.cafe_api_sdk.modules.branches_client import BranchesClient
from brewdesk.clients.cafe_api_sdk.modules.catalog_client import CatalogClient
from brewdesk.clients.cafe_api_sdk.modules.orders_client import OrdersClient
from brewdesk.clients.cafe_api_sdk.modules.redeems_client import RedeemsClient

logger = get_logger(__name__)


class HasId(Protocol):
    id: Any


RecordT = TypeVar("RecordT")
ViewT = TypeVar("ViewT", bound=HasId)


class CrudSynchronizer(Generic[RecordT, ViewT]):
    """Write-then-reconcile mutations over one in-memory collection.

    The collection only changes after the server confirms the write. A second
    update or delete on an id whose mutation is still pending is rejected
    before any request goes out.
    """

    def __init__(
        self,
        create_fn: Callable[[Mapping[str, Any]], RecordT],
        update_fn: Callable[[str, Mapping[str, Any]], RecordT],
        delete_fn: Callable[[str], None],
        to_view: Callable[[RecordT], ViewT],
        collection: list[ViewT] | None = None,
        *,
        resource: str = "record",
        notifier: Notifier | None = None,
        state: SessionState | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._create_fn = create_fn
        self._update_fn = update_fn
        self._delete_fn = delete_fn
        self._to_view = to_view
        self._collection: list[ViewT] = collection if collection is not None else []
        self.resource = resource
        self.notifier = notifier or notify_quietly
        self.state = state or SessionState()
        self.on_change = on_change

    @property
    def collection(self) -> list[ViewT]:
        return self._collection

    def create(self, draft: Mapping[str, Any]) -> OperationResult[ViewT]:
        try:
            record = self._create_fn(draft)
        except ApiError as error:
            return self._fail("create", None, error)
        view = self._to_view(record)
        self._append(record, view)
        return self._succeed("create", str(view.id), view, f"{self._label()} created.")

    def update(self, entity_id: int | str, patch: Mapping[str, Any]) -> OperationResult[ViewT]:
        key = str(entity_id)
        guard = mutation_key(self.resource, key)
        if not begin_mutation(self.state, guard):
            return self._fail("update", key, _in_flight_error(self.resource, key))
        try:
            record = self._update_fn(key, patch)
        except ApiError as error:
            return self._fail("update", key, error)
        finally:
            end_mutation(self.state, guard)
        view = self._to_view(record)
        self._replace(key, record, view)
        return self._succeed("update", key, view, f"{self._label()} updated.")

    def remove(self, entity_id: int | str) -> OperationResult[None]:
        key = str(entity_id)
        guard = mutation_key(self.resource, key)
        if not begin_mutation(self.state, guard):
            return self._fail("delete", key, _in_flight_error(self.resource, key))
        try:
            self._delete_fn(key)
        except ApiError as error:
            return self._fail("delete", key, error)
        finally:
            end_mutation(self.state, guard)
        self._discard(key)
        return self._succeed("delete", key, None, f"{self._label()} deleted.")

    def _append(self, record: RecordT, view: ViewT) -> None:
        self.collection.append(view)

    def _replace(self, entity_id: str, record: RecordT, view: ViewT) -> None:
        _upsert(self.collection, entity_id, view)

    def _discard(self, entity_id: str) -> None:
        self.collection[:] = _without(self.collection, entity_id)

    def _succeed(self, action: str, entity_id: str | None, value: Any, message: str) -> OperationResult:
        log_action(logger, self.resource, action, "success", entity_id=entity_id)
        if self.on_change is not None:
            self.on_change()
        self.notifier("success", message)
        return OperationResult.success(value)

    def _fail(self, action: str, entity_id: str | None, error: ApiError) -> OperationResult:
        log_action(
            logger,
            self.resource,
            action,
            "failure",
            entity_id=entity_id,
            kind=error.kind.value,
            code=error.code,
        )
        self.notifier("error", ErrorMapper.to_display_message(error))
        return OperationResult.failure(error)

    def _label(self) -> str:
        return self.resource.replace("_", " ").capitalize()


class ProductSynchronizer(CrudSynchronizer[ProductRecord, ProductView]):
    """Product mutations re-joined against the current catalog indexes.

    Raw records are kept next to the views so a later ``CatalogState.rebuild``
    does not drop confirmed writes.
    """

    def __init__(
        self,
        catalog_client: CatalogClient,
        catalog_state: CatalogState,
        *,
        notifier: Notifier | None = None,
        state: SessionState | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.catalog_state = catalog_state
        self._catalog_client = catalog_client
        super().__init__(
            create_fn=self._create_product,
            update_fn=self._update_product,
            delete_fn=catalog_client.delete_product,
            to_view=self._join,
            resource="product",
            notifier=notifier,
            state=state,
            on_change=on_change,
        )

    @property
    def collection(self) -> list[ProductView]:
        return self.catalog_state.products

    def _create_product(self, draft: Mapping[str, Any]) -> ProductRecord:
        payload, files = _split_files(draft)
        return self._catalog_client.create_product(payload, files=files)

    def _update_product(self, product_id: str, patch: Mapping[str, Any]) -> ProductRecord:
        payload, files = _split_files(patch)
        return self._catalog_client.update_product(product_id, payload, files=files)

    def _join(self, record: ProductRecord) -> ProductView:
        indexes = self.catalog_state.indexes()
        if is_dangling(record, indexes):
            # the write succeeded; only the labels are missing
            log_action(
                logger,
                "product",
                "resolve_labels",
                ErrorKind.MAPPING_ERROR.value,
                entity_id=str(record.id),
                sub_category=record.sub_category,
            )
        return raw_to_view_model(record, *indexes)

    def _append(self, record: ProductRecord, view: ProductView) -> None:
        self.catalog_state.raw_products.append(record)
        super()._append(record, view)

    def _replace(self, entity_id: str, record: ProductRecord, view: ProductView) -> None:
        raws = self.catalog_state.raw_products
        for index, existing in enumerate(raws):
            if str(existing.id) == entity_id:
                raws[index] = record
                break
        else:
            raws.append(record)
        super()._replace(entity_id, record, view)

    def _discard(self, entity_id: str) -> None:
        raws = self.catalog_state.raw_products
        raws[:] = [raw for raw in raws if str(raw.id) != entity_id]
        super()._discard(entity_id)


class _TaxonomySynchronizer(CrudSynchronizer[RecordT, ViewT]):
    """Writes to a list that product labels are joined against.

    Each confirmed change is published as a whole new list, which relabels
    every product in ``catalog_state``.
    """

    catalog_state: CatalogState

    def _publish(self, items: list[ViewT]) -> None:
        raise NotImplementedError

    def _append(self, record: RecordT, view: ViewT) -> None:
        self._publish([*self.collection, view])

    def _replace(self, entity_id: str, record: RecordT, view: ViewT) -> None:
        items = list(self.collection)
        _upsert(items, entity_id, view)
        self._publish(items)

    def _discard(self, entity_id: str) -> None:
        self._publish(_without(self.collection, entity_id))


class CategorySynchronizer(_TaxonomySynchronizer[CategoryRecord, Category]):
    def __init__(self, catalog_client: CatalogClient, catalog_state: CatalogState, **options: Any) -> None:
        self.catalog_state = catalog_state
        super().__init__(
            create_fn=lambda draft: catalog_client.create_category(
                str(draft.get("name", "")), str(draft.get("description") or "")
            ),
            update_fn=catalog_client.update_category,
            delete_fn=catalog_client.delete_category,
            to_view=Category.from_record,
            resource="category",
            **options,
        )

    @property
    def collection(self) -> list[Category]:
        return self.catalog_state.categories

    def _publish(self, items: list[Category]) -> None:
        self.catalog_state.set_categories(items)


class SubCategorySynchronizer(_TaxonomySynchronizer[SubCategoryRecord, SubCategory]):
    def __init__(self, catalog_client: CatalogClient, catalog_state: CatalogState, **options: Any) -> None:
        self.catalog_state = catalog_state
        super().__init__(
            create_fn=lambda draft: catalog_client.create_subcategory(
                str(draft.get("name", "")), draft.get("category")
            ),
            update_fn=catalog_client.update_subcategory,
            delete_fn=catalog_client.delete_subcategory,
            to_view=SubCategory.from_record,
            resource="subcategory",
            **options,
        )

    @property
    def collection(self) -> list[SubCategory]:
        return self.catalog_state.subcategories

    def _publish(self, items: list[SubCategory]) -> None:
        self.catalog_state.set_subcategories(items)


def branch_synchronizer(
    branches_client: BranchesClient,
    collection: list[BranchView] | None = None,
    **options: Any,
) -> CrudSynchronizer:
    return CrudSynchronizer(
        create_fn=branches_client.create_branch,
        update_fn=branches_client.update_branch,
        delete_fn=branches_client.delete_branch,
        to_view=BranchView.from_record,
        collection=collection,
        resource="branch",
        **options,
    )


def order_synchronizer(
    orders_client: OrdersClient,
    collection: list[OrderView] | None = None,
    **options: Any,
) -> CrudSynchronizer:
    """Orders only move through status transitions once placed."""

    def update_status(order_id: str, patch: Mapping[str, Any]):
        return orders_client.update_status(order_id, str(patch.get("order_status", "")))

    return CrudSynchronizer(
        create_fn=orders_client.create_order,
        update_fn=update_status,
        delete_fn=orders_client.delete_order,
        to_view=OrderView.from_record,
        collection=collection,
        resource="order",
        **options,
    )


def change_order_status(
    synchronizer: CrudSynchronizer,
    order_id: int | str,
    status: str,
) -> OperationResult[OrderView]:
    return synchronizer.update(order_id, {"order_status": status})


def redeem_offer_synchronizer(
    redeems_client: RedeemsClient,
    collection: list[RedeemOfferView] | None = None,
    **options: Any,
) -> CrudSynchronizer:
    return CrudSynchronizer(
        create_fn=redeems_client.create_offer,
        update_fn=redeems_client.update_offer,
        delete_fn=redeems_client.delete_offer,
        to_view=RedeemOfferView.from_record,
        collection=collection,
        resource="redeem_offer",
        **options,
    )


def _in_flight_error(resource: str, entity_id: str) -> ApiError:
    return ApiError.validation(
        f"Another change to this {resource.replace('_', ' ')} is still being saved.",
        code="MUTATION_IN_FLIGHT",
        details={"resource": resource, "id": entity_id},
    )


def _upsert(items: list[Any], entity_id: str, view: Any) -> None:
    for index, existing in enumerate(items):
        if str(existing.id) == entity_id:
            items[index] = view
            return
    items.append(view)


def _without(items: list[Any], entity_id: str) -> list[Any]:
    return [existing for existing in items if str(existing.id) != entity_id]


def _split_files(values: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any] | None]:
    payload: dict[str, Any] = {}
    files: dict[str, Any] = {}
    for key, value in values.items():
        # (filename, content, content_type) tuples are uploads
        if isinstance(value, tuple) and len(value) >= 2:
            files[key] = value
        else:
            payload[key] = value
    return payload, files or None
