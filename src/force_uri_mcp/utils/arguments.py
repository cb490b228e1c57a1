"""Argument checks shared by the path, URI and OAuth builders."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import SecretStr

from ..exceptions import InvalidArgumentError


def is_present(value: str | SecretStr | None) -> bool:
    """Return True when an optional string is set and non-empty."""
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    return bool(value)


def require(param_name: str, value: str | None) -> str:
    """Return ``value`` or raise :class:`InvalidArgumentError` naming ``param_name``."""
    if not is_present(value):
        raise InvalidArgumentError(param_name)
    assert value is not None
    return value


def require_absolute_url(param_name: str, value: str | None) -> str:
    """Like :func:`require`, but the value must also parse as an absolute URL."""
    value = require(param_name, value)
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        raise InvalidArgumentError(param_name, f"{param_name} is not a valid URI: {value!r}") from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidArgumentError(param_name, f"{param_name} must be an absolute URI: {value!r}")
    return value
