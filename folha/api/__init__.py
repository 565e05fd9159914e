"""Timesheet backend API integration."""

from folha.api.session import ApiSession

__all__ = ["ApiSession"]
