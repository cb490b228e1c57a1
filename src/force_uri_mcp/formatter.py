"""Relative path and absolute URI formatters for the REST data API.

Every resource lives below the service root that is resolved from the
instance URL, e.g. ``https://na99.salesforce.com/services/data/``. Each
resource has a ``*_path`` function returning the path relative to that root
(needed inside batch, composite and tree request bodies) and a companion
function returning the absolute URI.

Path segments are inserted as given; object names, ids and field names are
not percent-encoded.
"""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urljoin, urlsplit

from .exceptions import InvalidArgumentError
from .models import DEFAULT_BLOB_FIELD
from .utils.arguments import require, require_absolute_url
from .utils.query_string import add_query_string

# Trailing slash keeps "data" when relative paths are resolved against it.
BASE_URI_PATH = "services/data/"
VERSIONS_PATH = "services/data"


def base_uri(instance_url: str) -> str:
    """Resolve the service root for ``instance_url``."""
    instance_url = require_absolute_url("instance_url", instance_url)
    # urljoin leaves the path unresolved for schemes it does not treat as hierarchical.
    return require_absolute_url("instance_url", urljoin(instance_url, BASE_URI_PATH))


def combine(base: str, relative_path: str) -> str:
    """Resolve ``relative_path`` (which may carry a query string) against ``base``."""
    require("base", base)
    require("relative_path", relative_path)
    try:
        parts = urlsplit(relative_path)
    except ValueError as exc:
        raise InvalidArgumentError("relative_path", f"relative_path is not a valid URI: {relative_path!r}") from exc
    if parts.scheme or parts.netloc:
        raise InvalidArgumentError(
            "relative_path", f"relative_path must not carry a scheme or host: {relative_path!r}"
        )
    try:
        resolved = urljoin(base, relative_path)
    except ValueError as exc:
        raise InvalidArgumentError("relative_path", f"Unable to resolve {relative_path!r} against {base!r}") from exc
    return require_absolute_url("relative_path", resolved)


# Paths -----------------------------------------------------------------


def versions_path() -> str:
    return VERSIONS_PATH


def limits_path(api_version: str) -> str:
    """Organization limits."""
    require("api_version", api_version)
    return f"{api_version}/limits"


def describe_global_path(api_version: str) -> str:
    """Objects available to the logged-in user, with org encoding and batch size."""
    require("api_version", api_version)
    return f"{api_version}/sobjects"


def sobject_basic_information_path(api_version: str, sobject_name: str) -> str:
    """Object metadata; also used to create records of the object."""
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    return f"{api_version}/sobjects/{sobject_name}"


def sobject_describe_path(api_version: str, sobject_name: str) -> str:
    """Full metadata for the object, at all levels."""
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    return f"{api_version}/sobjects/{sobject_name}/describe"


def sobject_rows_path(
    api_version: str,
    sobject_name: str,
    object_id: str,
    fields: Sequence[str] | None = None,
) -> str:
    """Single record, used to read, update and delete it.

    ``fields`` restricts a read to the listed fields, e.g.
    ``v57.0/sobjects/Account/001D000000INjVe?fields=AccountNumber%2CBillingPostalCode``.
    """
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    require("object_id", object_id)

    path = f"{api_version}/sobjects/{sobject_name}/{object_id}"
    if fields:
        path = add_query_string(path, "fields", ",".join(fields))
    return path


def sobjects_composite_path(api_version: str) -> str:
    """Collections endpoint used to update multiple records."""
    require("api_version", api_version)
    return f"{api_version}/composite/sobjects"


def sobject_tree_path(api_version: str, sobject_name: str) -> str:
    """Tree endpoint used to create multiple records."""
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    return f"{api_version}/composite/tree/{sobject_name}"


def sobject_rows_by_external_id_path(
    api_version: str,
    sobject_name: str,
    field_name: str,
    field_value: str,
) -> str:
    """Record addressed by an external id field; used for read, upsert, delete and HEAD."""
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    require("field_name", field_name)
    require("field_value", field_value)
    return f"{api_version}/sobjects/{sobject_name}/{field_name}/{field_value}"


def sobject_collections_upsert_path(api_version: str, sobject_name: str, field_name: str) -> str:
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    require("field_name", field_name)
    return f"{api_version}/sobjects/{sobject_name}/{field_name}"


def sobject_blob_retrieve_path(
    api_version: str,
    sobject_name: str,
    object_id: str,
    blob_field: str = DEFAULT_BLOB_FIELD,
) -> str:
    """Binary content of a record, e.g. ``v57.0/sobjects/Document/015D0000000NdJOIA0/body``."""
    require("api_version", api_version)
    require("sobject_name", sobject_name)
    require("object_id", object_id)
    require("blob_field", blob_field)
    return f"{api_version}/sobjects/{sobject_name}/{object_id}/{blob_field}"


def query_path(api_version: str, query: str, query_all: bool = False) -> str:
    """SOQL query; ``query_all`` also returns deleted and archived records."""
    require("api_version", api_version)
    require("query", query)
    resource = "queryAll" if query_all else "query"
    return add_query_string(f"{api_version}/{resource}", "q", query)


def search_path(api_version: str, query: str) -> str:
    """SOSL search."""
    require("api_version", api_version)
    require("query", query)
    return add_query_string(f"{api_version}/search", "q", query)


def batch_path(api_version: str) -> str:
    require("api_version", api_version)
    return f"{api_version}/composite/batch"


# Absolute URIs ---------------------------------------------------------


def versions(instance_url: str) -> str:
    """Available API versions; resolved against the instance root, not the service root."""
    instance_url = require_absolute_url("instance_url", instance_url)
    return combine(instance_url, versions_path())


def limits(instance_url: str, api_version: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), limits_path(api_version))


def describe_global(instance_url: str, api_version: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), describe_global_path(api_version))


def sobject_basic_information(instance_url: str, api_version: str, sobject_name: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), sobject_basic_information_path(api_version, sobject_name))


def sobject_describe(instance_url: str, api_version: str, sobject_name: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), sobject_describe_path(api_version, sobject_name))


def sobject_rows(
    instance_url: str,
    api_version: str,
    sobject_name: str,
    object_id: str,
    fields: Sequence[str] | None = None,
) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), sobject_rows_path(api_version, sobject_name, object_id, fields))


def sobjects_composite(instance_url: str, api_version: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), sobjects_composite_path(api_version))


def sobject_tree(instance_url: str, api_version: str, sobject_name: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), sobject_tree_path(api_version, sobject_name))


def sobject_rows_by_external_id(
    instance_url: str,
    api_version: str,
    sobject_name: str,
    field_name: str,
    field_value: str,
) -> str:
    require_absolute_url("instance_url", instance_url)
    path = sobject_rows_by_external_id_path(api_version, sobject_name, field_name, field_value)
    return combine(base_uri(instance_url), path)


def sobject_collections_upsert(instance_url: str, api_version: str, sobject_name: str, field_name: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), sobject_collections_upsert_path(api_version, sobject_name, field_name))


def sobject_blob_retrieve(
    instance_url: str,
    api_version: str,
    sobject_name: str,
    object_id: str,
    blob_field: str = DEFAULT_BLOB_FIELD,
) -> str:
    require_absolute_url("instance_url", instance_url)
    path = sobject_blob_retrieve_path(api_version, sobject_name, object_id, blob_field)
    return combine(base_uri(instance_url), path)


def query(instance_url: str, api_version: str, query: str, query_all: bool = False) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), query_path(api_version, query, query_all))


def search(instance_url: str, api_version: str, query: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), search_path(api_version, query))


def batch(instance_url: str, api_version: str) -> str:
    require_absolute_url("instance_url", instance_url)
    return combine(base_uri(instance_url), batch_path(api_version))
