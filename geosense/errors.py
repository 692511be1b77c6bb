# geosense/errors.py
from __future__ import annotations
from typing import Any, Optional

__all__ = ["ConfigurationError", "UpstreamError"]


class ConfigurationError(RuntimeError):
    """Required process configuration (e.g. the provider key) is missing."""


class UpstreamError(RuntimeError):
    """
    The news provider answered with a non-2xx status, timed out, or could not
    be reached. `status` is the provider's HTTP status when there was one.
    """

    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status = status
        self.details = details if details is not None else message

    @property
    def status_code(self) -> int:
        return self.status or 500
