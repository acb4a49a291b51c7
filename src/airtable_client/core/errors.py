# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the Airtable client.

Every error carries a stable ``code``, an optional ``subcode`` from
:mod:`~airtable_client.core._error_codes` and a ``details`` mapping, so callers
can branch on the failure without parsing messages.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import _http_subcode, _is_transient_status


class AirtableError(Exception):
    """Base structured error for the Airtable client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(AirtableError, TypeError):
    """Raised before any request is sent when caller input is malformed."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class ResponseError(AirtableError):
    """Raised when the service returns an entity that fails shape checks."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            code="response_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server",
        )


class PaginationError(AirtableError):
    """Raised when a listing does not terminate within the request cap."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="pagination_error", subcode=subcode, details=details, source="client")


class HttpError(AirtableError):
    """Raised when a request comes back with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        service_error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if status_text is not None:
            d["status_text"] = status_text
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if service_error_type is not None:
            d["service_error_type"] = service_error_type
        super().__init__(
            message,
            code="http_error",
            subcode=_http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
            is_transient=_is_transient_status(status_code),
        )
        self.status_text = status_text


__all__ = ["AirtableError", "HttpError", "ValidationError", "ResponseError", "PaginationError"]
