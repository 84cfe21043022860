"""
Core business exceptions for the app feed proxy.

This module defines a hierarchy of custom exceptions to allow for granular
error handling and clear separation of failure domains. The HTTP layer
translates them into status codes.
"""


class AppFeedError(Exception):
    """Base exception for all component-specific errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(AppFeedError):
    """Raised for errors related to application configuration."""
    pass


# --- Client Errors ---

class ClientInputError(AppFeedError):
    """Raised when a request carries missing or malformed parameters."""
    pass


# --- Infrastructure Errors ---

class InfrastructureError(AppFeedError):
    """Base class for errors related to external systems (network, disk)."""
    pass


class UpstreamError(InfrastructureError):
    """Base class for failures talking to the upstream content API."""
    pass


class UpstreamTransportError(UpstreamError):
    """Raised when the upstream request cannot be completed (network, timeout)."""
    pass


class UpstreamStatusError(UpstreamError):
    """Raised when the upstream API answers with a non-200 status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class CacheError(InfrastructureError):
    """Base class for file cache failures."""
    pass


class CacheMissError(CacheError):
    """Raised when no cache file exists at the requested path."""
    pass


class CacheWriteError(CacheError, IOError):
    """Raised when a cache or dump file cannot be written."""
    pass


# --- Domain/Business Logic Errors ---

class DomainError(AppFeedError):
    """Base class for errors related to payload or business logic failures."""
    pass


class DecodeError(DomainError):
    """Raised when a payload does not match the expected feed envelope."""
    pass


class ConversionError(DomainError):
    """Raised when a decoded entry cannot be mapped (e.g., non-numeric rating)."""
    pass
