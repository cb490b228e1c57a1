"""URI service used by the MCP server to answer tool/resource requests."""

from __future__ import annotations

from typing import Callable

from mcp.server.fastmcp.utilities.logging import get_logger

from . import formatter, oauth
from .config import ForceSettings, OAuthClientConfig
from .exceptions import ConfigurationError
from .models import OAuthFlow, ResourceKind, ResourceRequest, UserAgentFlowOptions, WebServerFlowOptions

logger = get_logger(__name__)


_RESOURCE_PATHS: dict[ResourceKind, Callable[[ResourceRequest], str]] = {
    ResourceKind.VERSIONS: lambda r: formatter.versions_path(),
    ResourceKind.LIMITS: lambda r: formatter.limits_path(r.api_version),
    ResourceKind.DESCRIBE_GLOBAL: lambda r: formatter.describe_global_path(r.api_version),
    ResourceKind.SOBJECT_BASIC_INFORMATION: lambda r: formatter.sobject_basic_information_path(
        r.api_version, r.sobject_name
    ),
    ResourceKind.SOBJECT_DESCRIBE: lambda r: formatter.sobject_describe_path(r.api_version, r.sobject_name),
    ResourceKind.SOBJECT_ROWS: lambda r: formatter.sobject_rows_path(
        r.api_version, r.sobject_name, r.object_id, r.fields
    ),
    ResourceKind.SOBJECTS_COMPOSITE: lambda r: formatter.sobjects_composite_path(r.api_version),
    ResourceKind.SOBJECT_TREE: lambda r: formatter.sobject_tree_path(r.api_version, r.sobject_name),
    ResourceKind.SOBJECT_ROWS_BY_EXTERNAL_ID: lambda r: formatter.sobject_rows_by_external_id_path(
        r.api_version, r.sobject_name, r.field_name, r.field_value
    ),
    ResourceKind.SOBJECT_COLLECTIONS_UPSERT: lambda r: formatter.sobject_collections_upsert_path(
        r.api_version, r.sobject_name, r.field_name
    ),
    ResourceKind.SOBJECT_BLOB: lambda r: formatter.sobject_blob_retrieve_path(
        r.api_version, r.sobject_name, r.object_id, r.blob_field
    ),
    ResourceKind.QUERY: lambda r: formatter.query_path(r.api_version, r.query, r.query_all),
    ResourceKind.SEARCH: lambda r: formatter.search_path(r.api_version, r.query),
    ResourceKind.BATCH: lambda r: formatter.batch_path(r.api_version),
}


class ForceUriService:
    """High level façade that fills descriptors in from settings and formats them."""

    def __init__(self, settings: ForceSettings) -> None:
        self.settings = settings

    def resource_path(self, request: ResourceRequest) -> str:
        """Return the path relative to the service root, as used inside batch/composite bodies."""
        effective = self._with_defaults(request)
        return _RESOURCE_PATHS[effective.kind](effective)

    def resource_uri(self, request: ResourceRequest) -> str:
        effective = self._with_defaults(request)
        path = _RESOURCE_PATHS[effective.kind](effective)
        if effective.kind is ResourceKind.VERSIONS:
            uri = formatter.combine(self.settings.instance_url, path)
        else:
            uri = formatter.combine(formatter.base_uri(self.settings.instance_url), path)
        logger.debug("Resolved %s resource to %s", effective.kind.value, uri)
        return uri

    def versions_uri(self) -> str:
        return formatter.versions(self.settings.instance_url)

    def authorization_url(
        self,
        flow: OAuthFlow,
        *,
        state: str | None = None,
        immediate: bool = False,
    ) -> str:
        """Login redirect URL for the configured connected app."""
        client = self._oauth_client()
        if flow is OAuthFlow.USER_AGENT:
            options = UserAgentFlowOptions(display=client.display, scope=client.scope, state=state)
            return oauth.user_agent_authentication_url(
                client.login_url, client.client_id, client.redirect_url, options
            )
        web_options = WebServerFlowOptions(
            display=client.display, scope=client.scope, state=state, immediate=immediate
        )
        return oauth.web_server_authentication_url(
            client.login_url, client.client_id, client.redirect_url, web_options
        )

    def refresh_url(self, refresh_token: str) -> str:
        client = self._oauth_client()
        return oauth.refresh_token_url(client.token_url, refresh_token, client.client_id, client.client_secret)

    def _with_defaults(self, request: ResourceRequest) -> ResourceRequest:
        if request.api_version:
            return request
        return request.model_copy(update={"api_version": self.settings.api_version})

    def _oauth_client(self) -> OAuthClientConfig:
        if not self.settings.oauth:
            raise ConfigurationError("OAuth configuration is required to build OAuth URLs")
        return self.settings.oauth
