"""Stdio entrypoint for the REST URI formatting MCP server."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Annotated, Iterable

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.utilities.logging import get_logger
from pydantic import Field

from .config import ForceSettings, load_settings
from .exceptions import ForceUriError
from .models import DEFAULT_BLOB_FIELD, OAuthFlow, ResourceKind, ResourceRequest
from .service import ForceUriService
from .tooling import OAuthUrlKind, OAuthUrlResult, ResourceUriResult

logger = get_logger(__name__)

TRANSPORT_CHOICES = ("stdio", "sse", "streamable-http")


def create_server(settings: ForceSettings) -> FastMCP:
    """Create a configured FastMCP application instance."""

    service = ForceUriService(settings)
    host = os.environ.get("FASTMCP_HOST", "127.0.0.1")
    port = _coerce_int(os.environ.get("FASTMCP_PORT"), default=8000)
    log_level = _resolve_log_level(os.environ.get("FASTMCP_LOG_LEVEL", "INFO"))
    debug = os.environ.get("FASTMCP_DEBUG", "false").lower() in ("1", "true", "yes", "on")

    mcp = FastMCP(
        "force-uri",
        host=host,
        port=port,
        log_level=log_level,  # type: ignore[arg-type]
        debug=debug,
    )

    @mcp.tool(
        name="force.resource_uri",
        description=(
            f"Format REST resource addresses for {settings.instance_url} (API {settings.api_version}). "
            "Returns both the relative path and the absolute URI."
        ),
        structured_output=True,
    )
    def resource_uri(
        kind: Annotated[ResourceKind, Field(description="Resource to address.")],
        sobject_name: Annotated[str | None, Field(description="SObject name, e.g. Account.")] = None,
        object_id: Annotated[str | None, Field(description="Record identifier.")] = None,
        field_name: Annotated[str | None, Field(description="External id field name.")] = None,
        field_value: Annotated[str | None, Field(description="External id value.")] = None,
        fields: Annotated[list[str] | None, Field(description="Fields to return for record reads.")] = None,
        query: Annotated[str | None, Field(description="SOQL query or SOSL search text.")] = None,
        query_all: Annotated[bool, Field(description="Include deleted and archived records.")] = False,
        blob_field: Annotated[str, Field(description="Blob field to retrieve, e.g. VersionData.")] = DEFAULT_BLOB_FIELD,
        api_version: Annotated[str | None, Field(description="Overrides the configured API version.")] = None,
    ) -> ResourceUriResult:
        request = ResourceRequest(
            kind=kind,
            api_version=api_version,
            sobject_name=sobject_name,
            object_id=object_id,
            field_name=field_name,
            field_value=field_value,
            fields=fields,
            query=query,
            query_all=query_all,
            blob_field=blob_field,
        )
        try:
            result = _build_resource_result(service, request)
        except ForceUriError:
            logger.exception("force.resource_uri failed for %s", kind.value)
            raise
        logger.debug("force.resource_uri returning payload: %s", json.dumps(result.model_dump(mode="json")))
        return result

    @mcp.tool(
        name="force.oauth_url",
        description=(
            "Build an OAuth URL for the configured connected app: a login redirect for the "
            "user_agent or web_server flow, or a refresh_token exchange URL."
        ),
        structured_output=True,
    )
    def oauth_url(
        flow: Annotated[OAuthUrlKind, Field(description="OAuth flow to build the URL for.")],
        state: Annotated[str | None, Field(description="Opaque state echoed back after login.")] = None,
        immediate: Annotated[bool, Field(description="Web server flow only: never prompt the user.")] = False,
        refresh_token: Annotated[str | None, Field(description="Refresh token, required for refresh_token.")] = None,
    ) -> OAuthUrlResult:
        try:
            url = _build_oauth_url(service, flow, state=state, immediate=immediate, refresh_token=refresh_token)
        except ForceUriError:
            logger.exception("force.oauth_url failed for %s", flow)
            raise
        return OAuthUrlResult(flow=flow, url=url)

    @mcp.resource(
        "force+versions://default",
        description="URI listing the API versions available on the instance.",
        mime_type="text/plain",
    )
    def versions_resource() -> str:
        return service.versions_uri()

    return mcp


def _build_resource_result(service: ForceUriService, request: ResourceRequest) -> ResourceUriResult:
    return ResourceUriResult(
        kind=request.kind,
        path=service.resource_path(request),
        uri=service.resource_uri(request),
    )


def _build_oauth_url(
    service: ForceUriService,
    flow: OAuthUrlKind,
    *,
    state: str | None = None,
    immediate: bool = False,
    refresh_token: str | None = None,
) -> str:
    if flow == "refresh_token":
        return service.refresh_url(refresh_token or "")
    return service.authorization_url(OAuthFlow(flow), state=state, immediate=immediate)


def _resolve_log_level(requested: str) -> str:
    requested_log_level = requested.upper()
    allowed_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if requested_log_level == "TRACE":
        print(
            "[force-uri-mcp] TRACE is not supported; using DEBUG instead for verbose logging.",
            file=sys.stderr,
            flush=True,
        )
        return "DEBUG"
    if requested_log_level not in allowed_log_levels:
        print(
            f"[force-uri-mcp] Unsupported FASTMCP_LOG_LEVEL '{requested_log_level}'. "
            "Falling back to INFO. Valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
            file=sys.stderr,
            flush=True,
        )
        return "INFO"
    return requested_log_level


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the REST URI formatting MCP server.")
    parser.add_argument(
        "--config",
        default=os.environ.get("FORCE_CONFIG_FILE"),
        help="Path to the configuration YAML file (environment variables are used when omitted).",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORT_CHOICES,
        default=None,
        help="MCP transport to run (overrides FASTMCP_TRANSPORT).",
    )
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    settings = load_settings(Path(args.config) if args.config else None)
    server = create_server(settings)

    transport = (args.transport or os.environ.get("FASTMCP_TRANSPORT", "stdio")).lower()
    if transport not in TRANSPORT_CHOICES:
        raise ValueError(f"Unsupported transport '{transport}'. Expected one of {TRANSPORT_CHOICES}.")

    if transport == "stdio":
        print("[force-uri-mcp] Starting stdio transport", file=sys.stderr, flush=True)
    else:
        print(
            f"[force-uri-mcp] Starting {transport} server on {server.settings.host}:{server.settings.port}",
            file=sys.stderr,
            flush=True,
        )
    server.run(transport=transport)


def _coerce_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        print(
            f"[force-uri-mcp] Invalid integer for environment override: {value!r}; using default {default}",
            file=sys.stderr,
            flush=True,
        )
        return default


if __name__ == "__main__":
    main()
