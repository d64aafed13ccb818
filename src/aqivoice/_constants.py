"""Internal constants shared across the library."""

WAQI_BASE_URL = "https://api.waqi.info"
WAQI_MAP_URL = "https://waqi.info/#/c/{lat}/{lon}/10z"
IP_LOOKUP_URL = "https://ipapi.co/json/"
REVERSE_GEOCODE_URL = "https://nominatim.openstreetmap.org/reverse"
USER_AGENT = "aqivoice/1.5"

#: Mean Earth radius used by the haversine distance.
EARTH_RADIUS_KM = 6371.0

DEFAULT_VOICE_COMMANDS: tuple[str, ...] = (
    "what's the air quality like",
    "air quality",
    "how's the air",
    "what's the air like",
    "pollution level",
    "air pollution",
    "is the air safe",
    "is the air clean",
    "how clean is the air",
)

DEFAULT_WHERE_AM_I_COMMANDS: tuple[str, ...] = (
    "where am i",
    "debug location",
)

# ------------------------------------------------------------------
# Display durations (milliseconds) for the host's text wall
# ------------------------------------------------------------------

LISTENING_DISPLAY_MS = 5000
PROCESSING_DISPLAY_MS = 2000
RESULT_DISPLAY_MS = 15000
ERROR_DISPLAY_MS = 5000
