HEARTBEAT_INTERVAL_SECONDS = 10.0

REQUEST_TYPE_PREFIX = "se.cygni.snake.api.request."
EVENT_SUFFIX = "Event"

CLIENT_LANGUAGE = "Python"
CLIENT_DIST_NAME = "snakeclient"
FALLBACK_CLIENT_VERSION = "0.1.0"

DEFAULT_HOST = "snake.cygni.se"
DEFAULT_PORT = 80
DEFAULT_VENUE = "training"
DEFAULT_SNAKE_NAME = "default-python-snake-name"
