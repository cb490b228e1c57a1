"""Shared data models used by the URI formatter and the MCP server."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_BLOB_FIELD = "body"


class DisplayType(str, Enum):
    """Login page display types accepted by the authorization endpoint."""

    PAGE = "page"
    POPUP = "popup"
    TOUCH = "touch"
    MOBILE = "mobile"


class ResponseType(str, Enum):
    """OAuth response types requested from the authorization endpoint."""

    CODE = "code"
    TOKEN = "token"


class OAuthFlow(str, Enum):
    """Browser based OAuth flows that start with a login redirect."""

    USER_AGENT = "user_agent"
    WEB_SERVER = "web_server"


class ResourceKind(str, Enum):
    """REST resources that the formatter knows how to address."""

    VERSIONS = "versions"
    LIMITS = "limits"
    DESCRIBE_GLOBAL = "describe_global"
    SOBJECT_BASIC_INFORMATION = "sobject_basic_information"
    SOBJECT_DESCRIBE = "sobject_describe"
    SOBJECT_ROWS = "sobject_rows"
    SOBJECTS_COMPOSITE = "sobjects_composite"
    SOBJECT_TREE = "sobject_tree"
    SOBJECT_ROWS_BY_EXTERNAL_ID = "sobject_rows_by_external_id"
    SOBJECT_COLLECTIONS_UPSERT = "sobject_collections_upsert"
    SOBJECT_BLOB = "sobject_blob"
    QUERY = "query"
    SEARCH = "search"
    BATCH = "batch"


class UserAgentFlowOptions(BaseModel):
    """Optional parameters for the user-agent (implicit grant) login URL."""

    display: DisplayType = Field(default=DisplayType.PAGE, description="Login page display type.")
    scope: str | None = Field(default=None, description="Space separated OAuth scopes.")
    state: str | None = Field(default=None, description="Opaque state echoed back on the callback URL.")


class WebServerFlowOptions(UserAgentFlowOptions):
    """Optional parameters for the web server (authorization code) login URL."""

    immediate: bool = Field(
        default=False,
        description="If true, the user is never prompted and the flow fails when approval is required.",
    )


class ResourceRequest(BaseModel):
    """Descriptor of a single REST resource to address."""

    kind: ResourceKind = Field(description="Resource to address.")
    api_version: str | None = Field(default=None, description="API version token, e.g. v57.0.")
    sobject_name: str | None = Field(default=None, description="SObject name, e.g. Account.")
    object_id: str | None = Field(default=None, description="Record identifier.")
    field_name: str | None = Field(default=None, description="External id field name.")
    field_value: str | None = Field(default=None, description="External id field value.")
    fields: list[str] | None = Field(default=None, description="Fields to return for record reads.")
    blob_field: str = Field(default=DEFAULT_BLOB_FIELD, description="Blob field to retrieve.")
    query: str | None = Field(default=None, description="SOQL query or SOSL search text.")
    query_all: bool = Field(default=False, description="Include deleted and archived records in queries.")
