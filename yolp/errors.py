from __future__ import annotations


class YOLPError(RuntimeError):
    """Base client error."""


class ValidationError(YOLPError, ValueError):
    """Raised when request options violate a documented constraint."""


class RequestError(YOLPError):
    """Raised when the HTTP request could not be completed."""


class DecodeError(YOLPError):
    """Raised when a response body cannot be decoded."""


class ConfigurationError(YOLPError):
    """Raised when required configuration is missing or invalid."""


__all__ = ["YOLPError", "ValidationError", "RequestError", "DecodeError", "ConfigurationError"]
