"""
Centralized constants for ingestion, scoring, analytics and scheduling.

Change thresholds or job ids here instead of scattering literals across services and routes.
"""

# Ticket tier; a single constant until providers expose categories.
CATEGORY_GENERAL = "GENERAL"

# Snapshot provenance
SOURCE_REAL_API = "REAL_API"
SOURCE_SIMULATED = "SIMULATED"
AVAILABILITY_AVAILABLE = "AVAILABLE"
DEFAULT_CURRENCY = "USD"

# Fetch log
FETCH_TYPE_SCHEDULED = "SCHEDULED"
FETCH_TYPE_MANUAL = "MANUAL"
FETCH_STATUS_SUCCESS = "SUCCESS"
FETCH_STATUS_FAILED = "FAILED"
FETCH_STATUSES = (FETCH_STATUS_SUCCESS, FETCH_STATUS_FAILED)

# Trend classification over the trailing window
TREND_UP = "UP"
TREND_DOWN = "DOWN"
TREND_STABLE = "STABLE"
TREND_WINDOW_DAYS = 7
TREND_THRESHOLD_PCT = 2  # |change| > 2% is a move; [-2, 2] is STABLE

# Deal score and recommendation
NEUTRAL_DEAL_SCORE = 50  # price at market average, or no usable average
GREAT_DEAL_SCORE = 80
GOOD_DEAL_SCORE = 60
HOT_DEAL_SCORE = 70  # market overview "hot" bucket and trending reason
BUY_NOW = "NOW"
BUY_WAIT = "WAIT"

# Trending popularity: weight/caps per factor, total clamped to 100
POPULARITY_DEAL_WEIGHT = 0.35
POPULARITY_PER_PROVIDER = 4
POPULARITY_PROVIDER_CAP = 20
POPULARITY_TREND_BONUS = {TREND_DOWN: 15, TREND_STABLE: 8, TREND_UP: 0}
POPULARITY_SAVINGS_CAP = 20
POPULARITY_BUY_NOW_BONUS = 10
POPULARITY_MAX = 100
HOT_TRENDING_POPULARITY = 80
COMPETITIVE_PROVIDER_COUNT = 4

# Read API defaults and caps
DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 500
DEFAULT_HISTORY_DAYS = 7
MAX_HISTORY_DAYS = 90
DEFAULT_FETCH_LOG_LIMIT = 50

# Scheduler job ids (must match ids used in main.py add_job)
FETCH_PRICES_JOB_ID = "fetch_prices"
COMPUTE_SCORES_JOB_ID = "compute_scores"
