"""Exceptions raised by the service layer."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for all dashboard errors."""


class ConfigurationError(DashboardError):
    """Supabase connection settings are missing."""


class DataLoadError(DashboardError):
    """The sales table could not be read."""

    def __init__(self, message: str, *, credential_problem: bool = False) -> None:
        super().__init__(message)
        self.credential_problem = credential_problem


class AuthError(DashboardError):
    """Base class for login failures."""


class InvalidCredentialsError(AuthError):
    """The login RPC returned no matching user."""


class AuthServiceError(AuthError):
    """The login RPC could not be reached or failed unexpectedly."""
