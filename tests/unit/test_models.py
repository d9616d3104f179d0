"""Unit tests for core models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from pipeline_adapters.models import ArtifactItem, ContainerReference, CoverageProperties, ItemType


# ============================================
# ContainerReference
# ============================================


@pytest.mark.parametrize(
    "prefix, expected",
    [(None, ""), ("", ""), ("builds/42", "builds/42/"), ("builds/42/", "builds/42/")],
)
def test_container_reference_normalizes_prefix(prefix, expected):
    ref = ContainerReference(storage_account="acct", container_name="drops", prefix_folder_path=prefix)

    assert ref.prefix_folder_path == expected


def test_container_reference_blob_path():
    assert ContainerReference(storage_account="a", container_name="c").blob_path("x/y") == "x/y"
    ref = ContainerReference(storage_account="a", container_name="c", prefix_folder_path="p")
    assert ref.blob_path("x/y") == "p/x/y"


def test_container_reference_service_url():
    ref = ContainerReference(storage_account="acct", container_name="drops")
    assert ref.service_url == "https://acct.blob.core.windows.net"

    ref = ContainerReference(storage_account="acct", container_name="drops", account_url="http://localhost:10000/acct/")
    assert ref.service_url == "http://localhost:10000/acct"


def test_container_reference_is_immutable():
    ref = ContainerReference(storage_account="acct", container_name="drops")

    with pytest.raises(ValidationError):
        ref.container_name = "other"


@pytest.mark.parametrize("field", ["storage_account", "container_name"])
def test_container_reference_requires_account_and_container(field):
    values = {"storage_account": "acct", "container_name": "drops", field: ""}

    with pytest.raises(ValidationError):
        ContainerReference(**values)


def test_container_reference_repr_hides_access_key():
    ref = ContainerReference(storage_account="acct", container_name="drops", access_key="c2VjcmV0")

    assert "c2VjcmV0" not in repr(ref)


# ============================================
# CoverageProperties
# ============================================


def test_coverage_properties_from_raw_map():
    props = CoverageProperties.from_properties(
        {
            "buildfile": "build.gradle",
            "classfilter": "+com.acme.*",
            "ismultimodule": "true",
            "classfilesdirectories": "build/classes",
            "reportdirectory": "cc",
            "gradle5xOrHigher": "true",
            "gradleMajorVersion": "7",
            "unrelated": "ignored",
        }
    )

    assert props.build_file == "build.gradle"
    assert props.class_filter == "+com.acme.*"
    assert props.is_multi_module is True
    assert props.class_file_directories == "build/classes"
    assert props.report_directory == "cc"
    assert props.gradle_5x_or_higher is True
    assert props.gradle_major_version == 7


@pytest.mark.parametrize("version", ["null", "", None])
def test_coverage_properties_unknown_gradle_version(version):
    props = CoverageProperties.from_properties(
        {"buildfile": "build.gradle", "reportdirectory": "cc", "gradleMajorVersion": version}
    )

    assert props.gradle_major_version is None
    assert props.is_multi_module is False


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("", False), ("True", False), ("yes", False), ("1", False), ("false", False), (None, False)],
)
def test_coverage_properties_flags_accept_only_exact_true(raw, expected):
    props = CoverageProperties.from_properties(
        {"buildfile": "build.gradle", "reportdirectory": "cc", "ismultimodule": raw, "gradle5xOrHigher": raw}
    )

    assert props.is_multi_module is expected
    assert props.gradle_5x_or_higher is expected


def test_coverage_properties_flags_accept_python_bools():
    props = CoverageProperties(build_file="build.gradle", report_directory="cc", is_multi_module=True)

    assert props.is_multi_module is True
    assert props.gradle_5x_or_higher is False


@pytest.mark.parametrize("version, expected", [("6.5", 6), ("5.9", 5), (" 7 ", 7), (6.5, 6), (8, 8)])
def test_coverage_properties_truncates_gradle_version_to_major(version, expected):
    props = CoverageProperties.from_properties(
        {"buildfile": "build.gradle", "reportdirectory": "cc", "gradleMajorVersion": version}
    )

    assert props.gradle_major_version == expected


def test_coverage_properties_rejects_bad_version():
    with pytest.raises(ValidationError):
        CoverageProperties.from_properties(
            {"buildfile": "build.gradle", "reportdirectory": "cc", "gradleMajorVersion": "six"}
        )


def test_coverage_properties_requires_build_file():
    with pytest.raises(ValidationError):
        CoverageProperties.from_properties({"reportdirectory": "cc"})


# ============================================
# ArtifactItem
# ============================================


def test_artifact_item_defaults_and_serialization():
    item = ArtifactItem(path="a/b.txt", file_length=3, last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc))
    item.metadata["destinationUrl"] = "https://acct.blob.core.windows.net/drops/a/b.txt"

    data = item.to_dict()

    assert item.item_type == ItemType.FILE
    assert data["path"] == "a/b.txt"
    assert data["file_length"] == 3
    assert data["metadata"] == {"destinationUrl": "https://acct.blob.core.windows.net/drops/a/b.txt"}


def test_artifact_item_metadata_not_shared():
    first, second = ArtifactItem(path="a"), ArtifactItem(path="b")
    first.metadata["k"] = "v"

    assert second.metadata == {}
