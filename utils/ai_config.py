MODEL_VERSION = "heuristic-v1"
DEFAULT_FORECAST_DAYS = 30
HISTORY_WINDOW_DAYS = 30  # nominal length of the demand series fed to the forecaster
TREND_WINDOW_DAYS = 7  # leading/trailing window compared by the trend estimator

SEASONAL_PEAK_DAYS = (60, 150, 330)  # early spring, early summer, late autumn
SEASONAL_RADIUS_DAYS = 30
SEASONAL_UPLIFT = 1.2
DAYS_PER_YEAR = 365

CONFIDENCE_BASE = 85
CONFIDENCE_FLOOR = 60
CONFIDENCE_CEILING = 95
CONFIDENCE_VARIANCE_WEIGHT = 10

TREND_UP_THRESHOLD = 0.1
TREND_DOWN_THRESHOLD = -0.1
SEASONAL_NOTE_THRESHOLD = 1.1
LOW_VARIANCE_THRESHOLD = 0.2
HIGH_VARIANCE_THRESHOLD = 0.4

OVERSTOCK_MULTIPLIER = 3
EMERGENCY_ORDER_MULTIPLIER = 2
DEFAULT_SAFETY_STOCK_RATIO = 0.3  # safety stock assumed when a product row has none

DAYS_PER_MONTH = 30  # predicted demand is a 30-day figure
HIGH_URGENCY_DAYS = 7
MEDIUM_URGENCY_DAYS = 14

SYNTHETIC_SPREAD = 50
SYNTHETIC_BASE_RATIO = 0.5
