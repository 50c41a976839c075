"""Translate Supabase client failures into backend errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from health_tracker.errors import BackendError

_logger = logging.getLogger(__name__)


@contextmanager
def supabase_call(action: str) -> Iterator[None]:
    """Wrap a PostgREST call so transport and API failures surface uniformly."""
    try:
        yield
    except APIError as exc:
        _logger.warning("Supabase rejected request: action=%s error=%s", action, exc)
        raise BackendError(f"Failed to {action}: {exc.message}") from exc
    except httpx.HTTPError as exc:
        _logger.warning("Supabase unreachable: action=%s error=%s", action, exc)
        raise BackendError(f"Failed to {action}: {exc}") from exc
