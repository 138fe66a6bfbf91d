"""Internal constants shared across the library."""

USER_AGENT = "pyfleetmap"

# ------------------------------------------------------------------
# Device protocol keys inside ``raw.state.reported``
# ------------------------------------------------------------------

KEY_IGNITION = "1"
KEY_ODOMETER_METERS = "16"
KEY_ODOMETER = "241"
KEY_SPEED = "21"
KEY_SPEED_ALT = "sp"
KEY_VOLTAGE_MV = "66"
KEY_ALTITUDE = "alt"
KEY_ANGLE = "ang"
KEY_SATELLITES = "sat"
KEY_EVENT = "evt"
KEY_TIMESTAMP = "ts"
KEY_LATLNG = "latlng"

IGNITION_ON_TOKEN = "ON"

# ------------------------------------------------------------------
# Sampling thresholds  (count strictly above threshold → rate)
# ------------------------------------------------------------------

MARKER_SAMPLE_RATES: tuple[tuple[int, int], ...] = ((10_000, 15), (5_000, 8), (2_000, 4))
MARKER_DEFAULT_RATE = 1

PATH_SAMPLE_RATES: tuple[tuple[int, int], ...] = ((3_000, 20), (1_000, 10))
PATH_DEFAULT_RATE = 5
PATH_MIN_POINTS = 2

# ------------------------------------------------------------------
# Presentation defaults
# ------------------------------------------------------------------

FALLBACK_COLOR = "#95A5A6"
DEFAULT_CENTER: tuple[float, float] = (26.86, 80.93)
DEFAULT_ZOOM = 12

SUMMARY_TIMEOUT_S = 30.0
READINGS_TIMEOUT_S = 120.0


def sample_rate(count: int, thresholds: tuple[tuple[int, int], ...], default: int) -> int:
    """Return the decimation divisor for *count* items.

    *thresholds* is ordered from the largest threshold down; the first one
    *count* exceeds wins.
    """
    for threshold, rate in thresholds:
        if count > threshold:
            return rate
    return default
