from brewdesk.clients.cafe_api_sdk.config import ConfigError, SDKConfig
from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.http_client import NO_CONTENT, HttpClient
from brewdesk.clients.cafe_api_sdk.modules.auth_client import AuthClient
from brewdesk.clients.cafe_api_sdk.modules.branches_client import BranchesClient
from brewdesk.clients.cafe_api_sdk.modules.catalog_client import CatalogClient
from brewdesk.clients.cafe_api_sdk.modules.favorites_client import FavoritesClient, ToggleResult
from brewdesk.clients.cafe_api_sdk.modules.orders_client import OrdersClient
from brewdesk.clients.cafe_api_sdk.modules.redeems_client import RedeemsClient
from brewdesk.clients.cafe_api_sdk.session_store import FileSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "SDKConfig",
    "ConfigError",
    "ApiError",
    "ErrorKind",
    "HttpClient",
    "NO_CONTENT",
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
    "AuthClient",
    "CatalogClient",
    "BranchesClient",
    "OrdersClient",
    "FavoritesClient",
    "ToggleResult",
    "RedeemsClient",
]
