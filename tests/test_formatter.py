import pytest

from force_uri_mcp import formatter
from force_uri_mcp.exceptions import InvalidArgumentError

INSTANCE_URL = "https://na99.salesforce.com/"
API_VERSION = "v57.0"


@pytest.mark.parametrize(
    "instance_url",
    ["https://na99.salesforce.com", "https://na99.salesforce.com/"],
)
def test_base_uri_handles_trailing_slash(instance_url):
    assert formatter.base_uri(instance_url) == "https://na99.salesforce.com/services/data/"


@pytest.mark.parametrize("instance_url", [None, "", "na99.salesforce.com"])
def test_base_uri_rejects_missing_or_relative_instance_url(instance_url):
    with pytest.raises(InvalidArgumentError) as exc_info:
        formatter.base_uri(instance_url)
    assert exc_info.value.param_name == "instance_url"


@pytest.mark.parametrize("version", ["v57.0", "v20.0", "latest"])
def test_simple_version_paths(version):
    assert formatter.limits_path(version) == f"{version}/limits"
    assert formatter.describe_global_path(version) == f"{version}/sobjects"
    assert formatter.sobjects_composite_path(version) == f"{version}/composite/sobjects"
    assert formatter.batch_path(version) == f"{version}/composite/batch"


def test_sobject_paths():
    assert formatter.versions_path() == "services/data"
    assert formatter.sobject_basic_information_path(API_VERSION, "Contact") == "v57.0/sobjects/Contact"
    assert formatter.sobject_describe_path(API_VERSION, "Contact") == "v57.0/sobjects/Contact/describe"
    assert formatter.sobject_tree_path(API_VERSION, "Account") == "v57.0/composite/tree/Account"
    assert (
        formatter.sobject_rows_by_external_id_path(API_VERSION, "Account", "Ext__c", "A-1")
        == "v57.0/sobjects/Account/Ext__c/A-1"
    )
    assert formatter.sobject_collections_upsert_path(API_VERSION, "Account", "Ext__c") == "v57.0/sobjects/Account/Ext__c"


def test_sobject_rows_path_without_fields():
    assert formatter.sobject_rows_path(API_VERSION, "Account", "001xx0001") == "v57.0/sobjects/Account/001xx0001"
    assert formatter.sobject_rows_path(API_VERSION, "Account", "001xx0001", []) == "v57.0/sobjects/Account/001xx0001"


def test_sobject_rows_path_with_fields():
    path = formatter.sobject_rows_path(API_VERSION, "Account", "001xx0001", ["AccountNumber", "BillingPostalCode"])

    assert path == "v57.0/sobjects/Account/001xx0001?fields=AccountNumber%2CBillingPostalCode"
    assert path.count("fields=") == 1


def test_blob_path_defaults_to_body():
    assert formatter.sobject_blob_retrieve_path(API_VERSION, "Document", "015D0") == "v57.0/sobjects/Document/015D0/body"
    assert (
        formatter.sobject_blob_retrieve_path(API_VERSION, "ContentVersion", "068D0", "VersionData")
        == "v57.0/sobjects/ContentVersion/068D0/VersionData"
    )


def test_query_and_search_paths_carry_q_parameter():
    soql = "SELECT Id, Name FROM Account"

    assert formatter.query_path(API_VERSION, soql) == "v57.0/query?q=SELECT%20Id%2C%20Name%20FROM%20Account"
    assert formatter.query_path(API_VERSION, soql, query_all=True).startswith("v57.0/queryAll?q=")
    assert formatter.search_path(API_VERSION, "FIND {Acme}") == "v57.0/search?q=FIND%20%7BAcme%7D"


def test_path_segments_are_not_percent_encoded():
    assert formatter.sobject_basic_information_path(API_VERSION, "My Object") == "v57.0/sobjects/My Object"
    assert (
        formatter.sobject_rows_by_external_id_path(API_VERSION, "Account", "Ext__c", "a/b?c")
        == "v57.0/sobjects/Account/Ext__c/a/b?c"
    )


@pytest.mark.parametrize(
    ("func", "args", "param_name"),
    [
        (formatter.limits_path, ("",), "api_version"),
        (formatter.describe_global_path, (None,), "api_version"),
        (formatter.sobject_basic_information_path, (API_VERSION, ""), "sobject_name"),
        (formatter.sobject_describe_path, ("", "Account"), "api_version"),
        (formatter.sobject_rows_path, (API_VERSION, "Account", ""), "object_id"),
        (formatter.sobjects_composite_path, ("",), "api_version"),
        (formatter.sobject_tree_path, (API_VERSION, None), "sobject_name"),
        (formatter.sobject_rows_by_external_id_path, (API_VERSION, "Account", "", "1"), "field_name"),
        (formatter.sobject_rows_by_external_id_path, (API_VERSION, "Account", "Ext__c", ""), "field_value"),
        (formatter.sobject_collections_upsert_path, (API_VERSION, "Account", ""), "field_name"),
        (formatter.sobject_blob_retrieve_path, (API_VERSION, "Document", "015D0", ""), "blob_field"),
        (formatter.query_path, (API_VERSION, ""), "query"),
        (formatter.search_path, (API_VERSION, None), "query"),
        (formatter.batch_path, ("",), "api_version"),
        (formatter.limits, ("", API_VERSION), "instance_url"),
        (formatter.sobject_rows, (INSTANCE_URL, API_VERSION, "Account", None), "object_id"),
        (formatter.query, (INSTANCE_URL, "", "SELECT Id FROM Account"), "api_version"),
        (formatter.versions, ("",), "instance_url"),
        (formatter.describe_global, ("", API_VERSION), "instance_url"),
        (formatter.describe_global, (INSTANCE_URL, ""), "api_version"),
        (formatter.sobject_basic_information, ("", API_VERSION, "Account"), "instance_url"),
        (formatter.sobject_basic_information, (INSTANCE_URL, API_VERSION, ""), "sobject_name"),
        (formatter.sobject_describe, (None, API_VERSION, "Account"), "instance_url"),
        (formatter.sobject_describe, (INSTANCE_URL, API_VERSION, None), "sobject_name"),
        (formatter.sobjects_composite, ("", API_VERSION), "instance_url"),
        (formatter.sobjects_composite, (INSTANCE_URL, ""), "api_version"),
        (formatter.sobject_tree, ("", API_VERSION, "Account"), "instance_url"),
        (formatter.sobject_tree, (INSTANCE_URL, API_VERSION, ""), "sobject_name"),
        (formatter.sobject_rows_by_external_id, ("", API_VERSION, "Account", "Ext__c", "1"), "instance_url"),
        (formatter.sobject_rows_by_external_id, (INSTANCE_URL, API_VERSION, "Account", "Ext__c", ""), "field_value"),
        (formatter.sobject_collections_upsert, ("", API_VERSION, "Account", "Ext__c"), "instance_url"),
        (formatter.sobject_collections_upsert, (INSTANCE_URL, API_VERSION, "Account", None), "field_name"),
        (formatter.sobject_blob_retrieve, ("", API_VERSION, "Document", "015D0"), "instance_url"),
        (formatter.sobject_blob_retrieve, (INSTANCE_URL, API_VERSION, "Document", "015D0", ""), "blob_field"),
        (formatter.search, ("", API_VERSION, "FIND {x}"), "instance_url"),
        (formatter.search, (INSTANCE_URL, API_VERSION, ""), "query"),
        (formatter.batch, ("", API_VERSION), "instance_url"),
        (formatter.batch, (INSTANCE_URL, None), "api_version"),
    ],
)
def test_missing_required_argument_is_named(func, args, param_name):
    with pytest.raises(InvalidArgumentError) as exc_info:
        func(*args)
    assert exc_info.value.param_name == param_name


def test_sobject_rows_absolute_uri():
    uri = formatter.sobject_rows(INSTANCE_URL, API_VERSION, "Account", "001xx0001")

    assert uri == "https://na99.salesforce.com/services/data/v57.0/sobjects/Account/001xx0001"
    assert "//services" not in uri


def test_absolute_uris_keep_service_prefix_without_trailing_slash_on_instance():
    instance_url = "https://na99.salesforce.com"

    assert formatter.limits(instance_url, API_VERSION) == "https://na99.salesforce.com/services/data/v57.0/limits"
    assert formatter.describe_global(instance_url, API_VERSION) == "https://na99.salesforce.com/services/data/v57.0/sobjects"
    assert (
        formatter.sobject_describe(instance_url, API_VERSION, "Lead")
        == "https://na99.salesforce.com/services/data/v57.0/sobjects/Lead/describe"
    )
    assert formatter.batch(instance_url, API_VERSION) == "https://na99.salesforce.com/services/data/v57.0/composite/batch"


def test_absolute_uris_carry_query_strings():
    assert (
        formatter.query(INSTANCE_URL, API_VERSION, "SELECT Id FROM Account", query_all=True)
        == "https://na99.salesforce.com/services/data/v57.0/queryAll?q=SELECT%20Id%20FROM%20Account"
    )
    assert (
        formatter.sobject_rows(INSTANCE_URL, API_VERSION, "Account", "001xx0001", ["Name"])
        == "https://na99.salesforce.com/services/data/v57.0/sobjects/Account/001xx0001?fields=Name"
    )
    assert (
        formatter.search(INSTANCE_URL, API_VERSION, "FIND {Acme}")
        == "https://na99.salesforce.com/services/data/v57.0/search?q=FIND%20%7BAcme%7D"
    )


def test_remaining_absolute_uris():
    base = "https://na99.salesforce.com/services/data/v57.0"

    assert formatter.sobject_basic_information(INSTANCE_URL, API_VERSION, "Account") == f"{base}/sobjects/Account"
    assert formatter.sobjects_composite(INSTANCE_URL, API_VERSION) == f"{base}/composite/sobjects"
    assert formatter.sobject_tree(INSTANCE_URL, API_VERSION, "Account") == f"{base}/composite/tree/Account"
    assert (
        formatter.sobject_rows_by_external_id(INSTANCE_URL, API_VERSION, "Account", "Ext__c", "A-1")
        == f"{base}/sobjects/Account/Ext__c/A-1"
    )
    assert (
        formatter.sobject_collections_upsert(INSTANCE_URL, API_VERSION, "Account", "Ext__c")
        == f"{base}/sobjects/Account/Ext__c"
    )
    assert formatter.sobject_blob_retrieve(INSTANCE_URL, API_VERSION, "Attachment", "00P1") == f"{base}/sobjects/Attachment/00P1/body"


def test_versions_resolves_against_instance_root():
    assert formatter.versions(INSTANCE_URL) == "https://na99.salesforce.com/services/data"
    assert formatter.versions("https://na99.salesforce.com") == "https://na99.salesforce.com/services/data"


def test_combine_validates_inputs():
    with pytest.raises(InvalidArgumentError) as exc_info:
        formatter.combine("", "v57.0/limits")
    assert exc_info.value.param_name == "base"

    with pytest.raises(InvalidArgumentError) as exc_info:
        formatter.combine("https://na99.salesforce.com/services/data/", None)
    assert exc_info.value.param_name == "relative_path"

    with pytest.raises(InvalidArgumentError):
        formatter.combine("not-a-uri/", "v57.0/limits")


def test_combine_keeps_base_prefix():
    base = formatter.base_uri("https://eu5.salesforce.com")

    assert formatter.combine(base, "v57.0/query?q=x") == "https://eu5.salesforce.com/services/data/v57.0/query?q=x"


def test_base_uri_rejects_scheme_that_does_not_resolve():
    with pytest.raises(InvalidArgumentError) as exc_info:
        formatter.base_uri("foo://host/")
    assert exc_info.value.param_name == "instance_url"


@pytest.mark.parametrize("relative_path", ["//evil.example/limits", "https://evil.example/limits"])
def test_combine_rejects_paths_that_change_host(relative_path):
    with pytest.raises(InvalidArgumentError) as exc_info:
        formatter.combine("https://na99.salesforce.com/services/data/", relative_path)
    assert exc_info.value.param_name == "relative_path"


def test_api_version_cannot_redirect_to_another_host():
    with pytest.raises(InvalidArgumentError):
        formatter.limits(INSTANCE_URL, "//evil.example")
