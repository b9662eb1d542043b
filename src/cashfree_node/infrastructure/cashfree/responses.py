"""Helpers translating httpx responses into domain results."""

from __future__ import annotations

from typing import Any

import httpx

from ...domain.errors import OperationError


def operation_error(operation: str, exc: httpx.HTTPStatusError) -> OperationError:
    return OperationError(operation, exc.response.status_code, exc.response.text)


def json_body(operation: str, resp: httpx.Response) -> Any:
    """Decode a successful response body; an empty body decodes to ``{}``."""
    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError as e:
        raise OperationError(
            operation,
            resp.status_code,
            resp.text,
            reason="returned a non-JSON body",
        ) from e
