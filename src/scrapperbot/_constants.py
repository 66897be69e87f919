"""Internal constants shared across the library."""

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 50000

#: Inbound queue capacity; comfortably above one tick's worth of BOT events.
DEFAULT_QUEUE_CAPACITY = 1200
DEFAULT_LOG_LEVEL = "INFO"

#: Truncation length for raw lines echoed into log messages.
LOG_SNIPPET_LENGTH = 200

# ------------------------------------------------------------------
# Game rules
# ------------------------------------------------------------------

MAX_POWER = 12

#: Bot body diameter in arena units.
BOT_DIAMETER = 60.0
