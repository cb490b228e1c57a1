"""Pydantic models describing tool outputs for MCP tools."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .models import ResourceKind

OAuthUrlKind = Literal["user_agent", "web_server", "refresh_token"]


class ResourceUriResult(BaseModel):
    """Formatted addresses for one REST resource."""

    model_config = ConfigDict(
        title="force.resource_uri result",
        json_schema_extra={
            "examples": [
                {
                    "kind": "sobject_rows",
                    "path": "v57.0/sobjects/Account/001xx0001",
                    "uri": "https://na99.salesforce.com/services/data/v57.0/sobjects/Account/001xx0001",
                }
            ]
        },
    )

    kind: ResourceKind = Field(description="Resource that was addressed.")
    path: str = Field(
        description="Path relative to the service root; use this inside batch, composite and tree bodies."
    )
    uri: str = Field(description="Absolute URI for direct dispatch.")


class OAuthUrlResult(BaseModel):
    """URL produced for one of the OAuth flows."""

    flow: OAuthUrlKind = Field(description="OAuth flow the URL belongs to.")
    url: str = Field(description="Absolute URL including the encoded query string.")
