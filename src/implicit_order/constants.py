STATE_DIR_NAME = ".implicit_order"
CONFIG_FILE = "config.yaml"
FILE_STORE_NAME = "tasks.yaml"
WINDOWS_LOCK_BYTES = 4096

MIN_ORDER = 0
MAX_ORDER = 99
SPREAD_MIN_ORDER = 10  # Spread leaves 0-9 free for "move to top"
SPREAD_MAX_STEP = 10
SPREAD_MID_STEP = 5

BOUNDARY_TIER = 4
MIN_RAW_PRIORITY = 1
MAX_RAW_PRIORITY = 4

DEFAULT_FILTER = (
    "(##Personal & (!assigned | assigned to: me) & !@waiting-for & no date & p3) | #Buckets"
)
DEFAULT_POLICY = "pushy"
DEFAULT_STORE = "todoist"
DEFAULT_MAX_WORKERS = 8
DEFAULT_LOG_LEVEL = "INFO"

TODOIST_BASE_URL = "https://api.todoist.com/rest/v2"
TODOIST_TOKEN_ENV = "TODOIST_TOKEN"
TODOIST_TIMEOUT_SECONDS = 15
