import os
import sys
import uuid

INSTALLED_APPS = [
    'driveblob',
]

USE_TZ = True

# Maximum number of ref to file ID mappings kept in memory per storage
# instance. Entries only hold a name and an ID, so this can be generous.
DRIVEBLOB_LRU_SIZE = 500

# Timeout in seconds used in HTTP calls to the Drive API
DRIVEBLOB_TIMEOUT = 30

# OAuth application credentials used when refreshing an expired access token.
# Without them the access token is used until it expires.
DRIVEBLOB_CLIENT_ID = os.environ.get("DRIVEBLOB_CLIENT_ID")
DRIVEBLOB_CLIENT_SECRET = os.environ.get("DRIVEBLOB_CLIENT_SECRET")
DRIVEBLOB_TOKEN_URI = os.environ.get(
    "DRIVEBLOB_TOKEN_URI", "https://oauth2.googleapis.com/token"
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "color": {
            "()": "colorlog.ColoredFormatter",
            "format": "%(log_color)s%(levelname)-8s%(reset)s "
                      "%(message)s",
            "log_colors": {"DEBUG": "cyan", "INFO": "white",
                           "WARNING": "yellow", "ERROR": "red",
                           "CRITICAL": "white,bg_red",
                           },
        },
        "nocolor": {
            "format": "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "stderr": {
            "class": "logging.StreamHandler",
            "formatter": "color" if sys.stderr.isatty() else "nocolor",
        },
    },
    "loggers": {
        "driveblob": {
            "level": "WARNING",
        },
        "urllib3": {
            "level": "WARNING",
        },
        "django": {
            "handlers": [],
        }
    },
    "root": {
        "level": "WARNING",
        "handlers": ["stderr"],
    }

}

# Set a secret key for this session
SECRET_KEY = str(uuid.uuid4())
