"""
Data models shared by the artifact provider and the coverage enabler.

No heavy abstractions - just data containers. Items exchanged with the transfer
engine are plain dataclasses; inputs that need validation are pydantic models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from dataclasses_json import dataclass_json
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pipeline_adapters.constants import CoveragePropertyKeys, TransferDefaults


# ============================================
# Artifact Items
# ============================================


class ItemType(str, Enum):
    """Kind of entry an artifact item describes."""

    FILE = "file"
    FOLDER = "folder"


@dataclass_json
@dataclass
class ArtifactItem:
    """
    File/folder descriptor exchanged between a transfer engine and a provider.

    Providers mutate items in place: downloads rewrite ``path`` to the basename,
    uploads record the destination URL in ``metadata``.
    """

    path: str
    item_type: ItemType = ItemType.FILE
    file_length: int | None = None
    last_modified: datetime | None = None
    metadata: dict[str, str] = field(default_factory=dict)


# ============================================
# Blob Container Reference
# ============================================


class ContainerReference(BaseModel):
    """
    Immutable pointer to a blob container and the logical root inside it.

    ``prefix_folder_path`` is normalised to end with ``/`` (or stays empty).
    ``keep_prefix`` keeps the prefix on listed item paths, which in turn means
    paths handed back to ``get_item`` already contain it.
    """

    model_config = ConfigDict(frozen=True)

    storage_account: str = Field(min_length=1)
    container_name: str = Field(min_length=1)
    access_key: str | None = Field(default=None, repr=False)
    prefix_folder_path: str = ""
    account_url: str | None = None
    keep_prefix: bool = False

    @field_validator("prefix_folder_path", mode="before")
    @classmethod
    def normalize_prefix(cls, v: Any) -> str:
        if not v:
            return ""
        v = str(v)
        return v if v.endswith("/") else v + "/"

    @property
    def service_url(self) -> str:
        """Blob service endpoint for the account (``account_url`` wins when set)."""
        if self.account_url:
            return self.account_url.rstrip("/")
        return f"https://{self.storage_account}.blob.core.windows.net"

    def blob_path(self, item_path: str) -> str:
        """Full blob name for an item path relative to the prefix."""
        return self.prefix_folder_path + item_path if self.prefix_folder_path else item_path


@dataclass
class TransferSettings:
    """Per-call limits applied to uploads, downloads and listings."""

    block_size: int = TransferDefaults.BLOCK_SIZE
    max_concurrency: int = TransferDefaults.MAX_CONCURRENCY
    timeout: int = TransferDefaults.TIMEOUT_SECONDS
    download_max_retries: int = TransferDefaults.DOWNLOAD_MAX_RETRIES
    list_page_size: int = TransferDefaults.LIST_PAGE_SIZE


# ============================================
# Coverage Properties
# ============================================


class CoverageProperties(BaseModel):
    """
    Typed view of the coverage property map.

    Accepts either the Python field names or the raw keys used by build tasks
    (``buildfile``, ``classfilter``, ``ismultimodule`` ...).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    build_file: str = Field(
        min_length=1,
        validation_alias=AliasChoices("build_file", CoveragePropertyKeys.BUILD_FILE),
        description="Gradle build file the configuration is appended to",
    )
    class_filter: str | None = Field(
        default=None,
        validation_alias=AliasChoices("class_filter", CoveragePropertyKeys.CLASS_FILTER),
        description="Comma-separated +include/-exclude package filters",
    )
    is_multi_module: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_multi_module", CoveragePropertyKeys.IS_MULTI_MODULE),
    )
    class_file_directories: str | None = Field(
        default=None,
        validation_alias=AliasChoices("class_file_directories", CoveragePropertyKeys.CLASS_FILE_DIRECTORIES),
    )
    report_directory: str = Field(
        min_length=1,
        validation_alias=AliasChoices("report_directory", CoveragePropertyKeys.REPORT_DIRECTORY),
    )
    gradle_5x_or_higher: bool = Field(
        default=False,
        validation_alias=AliasChoices("gradle_5x_or_higher", CoveragePropertyKeys.GRADLE_5X_OR_HIGHER),
    )
    gradle_major_version: int | None = Field(
        default=None,
        validation_alias=AliasChoices("gradle_major_version", CoveragePropertyKeys.GRADLE_MAJOR_VERSION),
    )

    @field_validator("gradle_major_version", mode="before")
    @classmethod
    def parse_unknown_version(cls, v: Any) -> Any:
        """Build tasks send the literal string 'null' when the version could not be detected."""
        if v is None or (isinstance(v, str) and v.strip().lower() in ("", "null")):
            return None
        if isinstance(v, float):
            return int(v)
        if isinstance(v, str):
            v = v.strip()
            # "6.5" means Gradle 6
            major, dot, minor = v.partition(".")
            if dot and major.isdigit() and minor.isdigit():
                return int(major)
        return v

    @field_validator("is_multi_module", "gradle_5x_or_higher", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> Any:
        """Build tasks send flags as strings; only the exact value 'true' is set."""
        if v is None:
            return False
        if isinstance(v, str):
            return v == "true"
        return v

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> "CoverageProperties":
        """Build from a raw string-keyed property map."""
        return cls.model_validate(properties)
