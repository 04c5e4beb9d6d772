from siteassets.asset_copier import AssetCopier, CopyRunOptions
from siteassets.config import SiteConfig, load_config
from siteassets.models import CopyError, CopyStats

__all__ = [
    "AssetCopier",
    "CopyError",
    "CopyRunOptions",
    "CopyStats",
    "SiteConfig",
    "load_config",
]
