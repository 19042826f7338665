"""Exceptions raised while resolving image configuration"""

from typing import Optional, Dict, Any


class ImageCtlError(Exception):
    def __init__(
        self,
        message: str,
        code: str = "IMAGE_CTL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ClientUnavailableError(ImageCtlError):
    def __init__(self, message: str = "Cannot create docker client"):
        super().__init__(message, "CLIENT_UNAVAILABLE")


class ValidationError(ImageCtlError):
    def __init__(self, message: str = "Validation failed", code: str = "VALIDATION_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, details)


class InvalidImageNameError(ValidationError):
    def __init__(self, name: str, reason: str):
        super().__init__(
            f"Invalid image name '{name}': {reason}",
            "INVALID_IMAGE_NAME",
            {"name": name, "reason": reason}
        )


class AuthenticationFailedError(ImageCtlError):
    def __init__(self, host: str, hint: str):
        super().__init__(
            f"Registry authentication failed for {host}.\n         {hint}",
            "AUTHENTICATION_FAILED",
            {"host": host, "hint": hint}
        )
        self.host = host
        self.hint = hint


class DockerfileReadError(ImageCtlError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot read Dockerfile {path}: {reason}",
            "DOCKERFILE_READ_ERROR",
            {"path": path}
        )


class AbortedError(ImageCtlError):
    def __init__(self, message: str = "Aborted by user"):
        super().__init__(message, "ABORTED")


class RegistryClientError(ImageCtlError):
    def __init__(self, operation: str, message: str):
        super().__init__(
            f"Registry operation '{operation}' failed: {message}",
            "REGISTRY_CLIENT_ERROR",
            {"operation": operation}
        )


class InvalidTransitionError(ImageCtlError):
    def __init__(self, state: str, event: str):
        super().__init__(
            f"No transition from state '{state}' on event '{event}'",
            "INVALID_TRANSITION",
            {"state": state, "event": event}
        )
