# util/enums.py
from enum import Enum


class Color(str, Enum):
    RESET = "\033[0m"
    GREEN = "\033[32m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorMessage(str, Enum):
    """Stage prefixes reported by the driver before exiting."""

    MISSING_ENV = "missing required env vars"
    WALK = "error walking the path"
    NAMESPACE = "error while finding or creating namespace"
    UPLOAD = "error while uploading to WorkersKV"

    def __str__(self):
        return self.value
