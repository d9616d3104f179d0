"""
Constants for pipeline_adapters.

Centralizes magic strings, transfer defaults and user-facing message templates.
"""

# ============================================
# Transfer Defaults
# ============================================


class TransferDefaults:
    """Default values for blob transfers."""

    BLOCK_SIZE = 8 * 1024 * 1024  # Chunk size for block uploads (8 MiB)
    MAX_CONCURRENCY = 20  # Concurrent block transfers per upload
    TIMEOUT_SECONDS = 30 * 60  # Time budget for a single upload/download
    DOWNLOAD_MAX_RETRIES = 10
    LIST_PAGE_SIZE = 100


# ============================================
# Metadata Keys
# ============================================


class MetadataKeys:
    """Keys written into ArtifactItem.metadata."""

    DESTINATION_URL = "destinationUrl"


# ============================================
# Coverage Property Keys
# ============================================


class CoveragePropertyKeys:
    """
    Raw keys of the coverage property map handed over by the build task.

    ``CoverageProperties.from_properties`` maps these onto typed fields.
    """

    BUILD_FILE = "buildfile"
    CLASS_FILTER = "classfilter"
    IS_MULTI_MODULE = "ismultimodule"
    CLASS_FILE_DIRECTORIES = "classfilesdirectories"
    REPORT_DIRECTORY = "reportdirectory"
    GRADLE_5X_OR_HIGHER = "gradle5xOrHigher"
    GRADLE_MAJOR_VERSION = "gradleMajorVersion"


# ============================================
# Coverage Template Selection
# ============================================


class ModuleType:
    """Gradle project layouts."""

    SINGLE = "single"
    MULTI = "multi"


class TemplateVersion:
    """JaCoCo Gradle template generations."""

    V1 = "V1"  # Gradle < 6
    V2 = "V2"  # Gradle >= 6

    MIN_GRADLE_FOR_V2 = 6


# ============================================
# Messages
# ============================================


class Messages:
    """
    Message templates for log output and errors.

    Formatted with ``str.format`` positional arguments.
    """

    UPLOADING_ITEM = "Uploading {0}"
    CREATED_BLOB_FOR_ITEM = "Created blob for item {0}. Blob uri: {1}"
    ERROR_IN_WRITE_STREAM = "An error occurred while writing to the blob: {0}"
    ERROR_IN_READ_STREAM = "An error occurred while reading the blob: {0}"
    FETCHED_ITEM_LIST = "Successfully fetched the list of items from the container."
    GET_ITEMS_NOT_SUPPORTED = "Listing items of an artifact item is not supported by the blob provider."
    FAILED_TO_APPEND_CC = "Failed to append code coverage configuration to the build file: {0}"
    FILE_NOT_FOUND = "File not found: {0}"
    INVALID_CLASS_FILTER = "Invalid class filter: '{0}'"
    UNSUPPORTED_TEMPLATE = "Invalid Gradle version or module type: {0}-{1}"
    TRANSFER_TIMED_OUT = "Transfer of {0} exceeded the {1} second time budget"
