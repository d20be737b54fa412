from .executor import BulkActionExecutor
from .gateway import RewardCatalogGateway, SqlRewardCatalogGateway
from .session import CurationSession

__all__ = [
    "BulkActionExecutor",
    "CurationSession",
    "RewardCatalogGateway",
    "SqlRewardCatalogGateway",
]
