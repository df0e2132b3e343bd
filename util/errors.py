# util/errors.py
from typing import Optional, Sequence


class AppError(Exception):
    # Flow: components raise AppError subclasses; main.run decides the exit status.
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AppError):
    """One or more environment variables are missing or invalid."""

    def __init__(
        self, missing: Sequence[str], invalid: Optional[Sequence[str]] = None
    ) -> None:
        self.missing = list(missing)
        self.invalid = list(invalid or [])
        lines = [f"{name} not found" for name in self.missing] + self.invalid
        super().__init__("\n".join(lines))


class PathError(AppError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path


class PathNotFoundError(PathError):
    def __init__(self, path: str) -> None:
        super().__init__(path, "path not found")


class DirectoryTraversalError(PathError):
    def __init__(self, path: str) -> None:
        super().__init__(path, "error while listing directory")


class FileReadError(AppError):
    def __init__(self, path: str) -> None:
        super().__init__(f"error while reading file: {path}")
        self.path = path


class SerializationError(AppError):
    def __init__(self, key: str) -> None:
        super().__init__(f"error marshaling file definition: {key}")
        self.key = key


class RemoteApiError(AppError):
    """
    Cloudflare API call failed.
    - status_code is None when the request never got a response.
    - errors holds the "code: message" pairs from the response envelope.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[Sequence[str]] = None,
    ) -> None:
        self.status_code = status_code
        self.errors = list(errors or [])
        detail = f" ({'; '.join(self.errors)})" if self.errors else ""
        super().__init__(f"{message}{detail}")


class NamespaceResolutionError(AppError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{reason}: {name}")
        self.name = name


class WriteError(AppError):
    def __init__(self, key: str) -> None:
        super().__init__(f"error while creating KV: {key}")
        self.key = key
