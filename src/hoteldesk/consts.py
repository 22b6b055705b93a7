"""Constants for HotelDesk application"""

from .enums import BadgeVariant

# ==================== File Paths ====================
DATABASE_PATH = "data/hoteldesk.db"
LOG_FILE_DEFAULT = "data/hoteldesk.log"

# ==================== Component Engine ====================
DEFAULT_PAGE_SIZE = 10
COMPONENT_CODE_PREFIX = "COMPONENT_"
PAGE_WINDOW_SIZE = 5
DEMO_ROW_COUNT = 25
SCHEMA_CACHE_SIZE = 256

# Filter value meaning "no filter"
FILTER_ALL = "all"

# Badge variants used when a column has no explicit mapping for a value
BADGE_FALLBACK_VARIANTS = {
    "Actif": BadgeVariant.DEFAULT,
    "Terminé": BadgeVariant.DEFAULT,
    "En attente": BadgeVariant.SECONDARY,
    "Inactif": BadgeVariant.OUTLINE,
}
BADGE_FALLBACK_DEFAULT = BadgeVariant.SECONDARY

# ==================== Display ====================
DATE_FORMAT_DEFAULT = "%d/%m/%Y"
THOUSANDS_SEPARATOR_DEFAULT = "\u202f"  # narrow no-break space
DECIMAL_SEPARATOR_DEFAULT = ","
TRUE_GLYPH = "✓"
FALSE_GLYPH = "✗"

# ==================== Database Configuration ====================
DB_MAX_CONNECTIONS = 8
DB_STALE_TIMEOUT = 300  # 5 minutes
DB_PRAGMAS = {
    "journal_mode": "wal",
    "synchronous": "NORMAL",
    "busy_timeout": 5000,
    "foreign_keys": 1,
}
