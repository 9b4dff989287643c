"""Application constants.

Column projections for the technician table, the search result cap, and the
path prefixes exempt from the session gate.
"""

# ---------------------------------------------------------------------------
# Technician columns
# ---------------------------------------------------------------------------
CONTACT_FIELDS: tuple[str, ...] = (
    "name",
    "region",
    "email",
    "phone",
    "tech_manager_email",
    "tech_manager_phone",
    "ops_manager_email",
    "ops_manager_phone",
)

# Every column a client may write; ``id`` is store-assigned
WRITABLE_FIELDS: tuple[str, ...] = ("code", *CONTACT_FIELDS)

ALL_FIELDS: tuple[str, ...] = ("id", *WRITABLE_FIELDS)

# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
SEARCH_RESULT_LIMIT: int = 50

# ---------------------------------------------------------------------------
# PostgREST error codes
# ---------------------------------------------------------------------------
# Raised when a single-row request matches nothing
PGRST_NO_ROWS: str = "PGRST116"

# ---------------------------------------------------------------------------
# Technician ids
# ---------------------------------------------------------------------------
# ``id`` is a Postgres bigint
MAX_TECHNICIAN_ID: int = 2**63 - 1

# ---------------------------------------------------------------------------
# Session gate
# ---------------------------------------------------------------------------
# Matched per path segment: "/api" covers "/api" and "/api/...", not "/apix"
GATE_BYPASS_PREFIXES: tuple[str, ...] = (
    "/api",
    "/static",
    "/_next",
    "/favicon.ico",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
)
