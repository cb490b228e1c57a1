"""OAuth 2.0 login and token refresh URL builders."""

from __future__ import annotations

from pydantic import SecretStr

from .models import ResponseType, UserAgentFlowOptions, WebServerFlowOptions
from .utils.arguments import is_present, require, require_absolute_url
from .utils.query_string import add_query_params

REFRESH_TOKEN_GRANT = "refresh_token"
TOKEN_RESPONSE_FORMAT = "json"


def user_agent_authentication_url(
    login_url: str,
    client_id: str,
    redirect_url: str,
    options: UserAgentFlowOptions | None = None,
) -> str:
    """Format the authorization URL for the user-agent (implicit grant) flow.

    ``login_url`` is the authorization endpoint, ``client_id`` the consumer key and
    ``redirect_url`` the callback URL of the connected app. ``scope`` and
    ``state`` are only sent when set.
    """
    require_absolute_url("login_url", login_url)
    require("client_id", client_id)
    require("redirect_url", redirect_url)
    options = options or UserAgentFlowOptions()

    params: list[tuple[str, str]] = [
        ("response_type", ResponseType.TOKEN.value),
        ("client_id", client_id),
        ("redirect_uri", redirect_url),
        ("display", options.display.value),
    ]
    _append_scope_and_state(params, options)
    return add_query_params(login_url, params)


def web_server_authentication_url(
    login_url: str,
    client_id: str,
    redirect_url: str,
    options: WebServerFlowOptions | None = None,
) -> str:
    """Format the authorization URL for the web server (authorization code) flow.

    ``immediate`` is always sent; ``scope`` and ``state`` only when set.
    """
    require_absolute_url("login_url", login_url)
    require("client_id", client_id)
    require("redirect_url", redirect_url)
    options = options or WebServerFlowOptions()

    # TODO: code_challenge, login_hint, nonce and prompt parameters
    params: list[tuple[str, str]] = [
        ("response_type", ResponseType.CODE.value),
        ("client_id", client_id),
        ("redirect_uri", redirect_url),
        ("display", options.display.value),
        ("immediate", "true" if options.immediate else "false"),
    ]
    _append_scope_and_state(params, options)
    return add_query_params(login_url, params)


def refresh_token_url(
    token_refresh_url: str,
    refresh_token: str,
    client_id: str,
    client_secret: str | SecretStr | None = None,
) -> str:
    """Format the token endpoint URL that exchanges a refresh token for an access token.

    ``client_secret`` is required unless the connected app does not demand a
    secret for the web server flow. ``format=json`` is always the last parameter.
    """
    require_absolute_url("token_refresh_url", token_refresh_url)
    require("refresh_token", refresh_token)
    require("client_id", client_id)

    params: list[tuple[str, str]] = [
        ("grant_type", REFRESH_TOKEN_GRANT),
        ("refresh_token", refresh_token),
        ("client_id", client_id),
    ]
    if is_present(client_secret):
        secret = client_secret.get_secret_value() if isinstance(client_secret, SecretStr) else client_secret
        assert secret is not None
        params.append(("client_secret", secret))
    params.append(("format", TOKEN_RESPONSE_FORMAT))
    return add_query_params(token_refresh_url, params)


def _append_scope_and_state(params: list[tuple[str, str]], options: UserAgentFlowOptions) -> None:
    if is_present(options.scope):
        params.append(("scope", options.scope))  # type: ignore[arg-type]
    if is_present(options.state):
        params.append(("state", options.state))  # type: ignore[arg-type]
