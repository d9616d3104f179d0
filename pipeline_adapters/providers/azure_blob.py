"""
Azure Blob Storage artifact provider.

Maps the flat blob listing of one container (optionally scoped to a folder
prefix) onto artifact items, and streams item content to and from block blobs.
Paging, retries and chunked transfers are left to ``azure-storage-blob``.
"""

import logging
import posixpath
import time
from datetime import datetime, timezone
from typing import BinaryIO, Callable

from azure.core.credentials import AzureNamedKeyCredential
from azure.core.exceptions import ResourceExistsError, ServiceRequestTimeoutError
from azure.storage.blob import BlobProperties, BlobServiceClient, StorageStreamDownloader

from pipeline_adapters.constants import MetadataKeys, Messages
from pipeline_adapters.models import ArtifactItem, ContainerReference, ItemType, TransferSettings
from pipeline_adapters.providers import ArtifactProvider, OperationNotSupportedError


def storage_error_message(error: BaseException) -> str:
    """
    Best-effort human readable message for a storage failure.

    Azure errors carry ``message`` (and HTTP errors ``reason``); anything else
    falls back to ``str(error)``.
    """
    for attr in ("message", "reason"):
        value = getattr(error, attr, None)
        if value:
            return str(value)
    return str(error)


class AzureBlobProvider(ArtifactProvider):
    """
    Artifact provider backed by an Azure blob container.

    Usage::

        container = ContainerReference(storage_account="acct", container_name="drops", access_key=key)
        provider = AzureBlobProvider(container)
        for item in provider.get_root_items():
            stream = provider.get_item(item)
    """

    def __init__(
        self,
        container: ContainerReference,
        service_client: BlobServiceClient | None = None,
        logger: logging.Logger | None = None,
        settings: TransferSettings | None = None,
    ):
        self.container = container
        self.settings = settings or TransferSettings()
        self._logger = logger or logging.getLogger(__name__)

        if service_client is None:
            credential = None
            if container.access_key:
                credential = AzureNamedKeyCredential(container.storage_account, container.access_key)
            service_client = BlobServiceClient(
                account_url=container.service_url,
                credential=credential,
                max_block_size=self.settings.block_size,
                max_single_put_size=self.settings.block_size,
            )
        self._service_client = service_client
        self._container_client = service_client.get_container_client(container.container_name)

    @property
    def prefix(self) -> str:
        return self.container.prefix_folder_path

    def put_item(self, item: ArtifactItem, stream: BinaryIO) -> ArtifactItem:
        """
        Upload a stream to ``prefix + item.path`` and record the blob URL.

        Raises:
            AzureError: If the upload fails (logged, then re-raised unchanged)
        """
        self._ensure_container()

        blob_path = self.container.blob_path(item.path)
        self._logger.info(Messages.UPLOADING_ITEM.format(blob_path))

        blob_client = self._container_client.get_blob_client(blob_path)
        try:
            blob_client.upload_blob(
                stream,
                overwrite=True,
                max_concurrency=self.settings.max_concurrency,
                timeout=self.settings.timeout,
                progress_hook=self._progress_hook(blob_path),
            )
        except Exception as e:
            self._logger.error(Messages.ERROR_IN_WRITE_STREAM.format(storage_error_message(e)))
            raise

        blob_url = blob_client.url
        self._logger.info(Messages.CREATED_BLOB_FOR_ITEM.format(item.path, blob_url))
        item.metadata[MetadataKeys.DESTINATION_URL] = blob_url
        return item

    def get_root_items(self) -> list[ArtifactItem]:
        blobs = self._list_blobs(self.prefix)
        items = [self._to_artifact_item(blob) for blob in blobs]
        self._logger.info(Messages.FETCHED_ITEM_LIST)
        return items

    def get_items(self, item: ArtifactItem) -> list[ArtifactItem]:
        raise OperationNotSupportedError(Messages.GET_ITEMS_NOT_SUPPORTED)

    def get_item(self, item: ArtifactItem) -> StorageStreamDownloader:
        """
        Open a download stream for an item and rename the item to its basename.

        The basename lets the engine write the file straight into the target
        folder.

        Raises:
            AzureError: If the download cannot be started (logged, then re-raised)
        """
        blob_path = item.path
        if not self.container.keep_prefix and self.prefix:
            blob_path = self.prefix + item.path

        blob_client = self._container_client.get_blob_client(blob_path)
        try:
            downloader = blob_client.download_blob(
                timeout=self.settings.timeout,
                retry_total=self.settings.download_max_retries,
                progress_hook=self._progress_hook(blob_path),
            )
        except Exception as e:
            self._logger.error(Messages.ERROR_IN_READ_STREAM.format(storage_error_message(e)))
            raise

        item.path = posixpath.basename(item.path)
        return downloader

    def _ensure_container(self) -> None:
        try:
            self._container_client.create_container()
            self._logger.debug(f"Created container {self.container.container_name}")
        except ResourceExistsError:
            self._logger.debug(f"Container {self.container.container_name} already exists")

    def _list_blobs(self, prefix: str) -> list[BlobProperties]:
        """List every blob under ``prefix``, following pages sequentially."""
        pages = self._container_client.list_blobs(
            name_starts_with=prefix or None,
            results_per_page=self.settings.list_page_size,
        ).by_page()

        blobs: list[BlobProperties] = []
        for page in pages:
            blobs.extend(page)
        return blobs

    def _to_artifact_item(self, blob: BlobProperties) -> ArtifactItem:
        if not self.container.keep_prefix and self.prefix:
            # Relative path without the prefix; only the first occurrence is removed
            path = blob.name.replace(self.prefix, "", 1).strip()
        else:
            path = blob.name

        return ArtifactItem(
            path=path,
            item_type=ItemType.FILE,
            file_length=blob.size,
            last_modified=_as_utc(blob.last_modified),
        )

    def _progress_hook(self, blob_path: str) -> Callable[[int, int | None], None]:
        """
        Build a progress callback that enforces the transfer time budget.

        The SDK timeout applies to each request on its own, so the budget for
        the whole call is checked here, after every chunk.

        Raises:
            ServiceRequestTimeoutError: From the callback once the budget is spent
        """
        budget = self.settings.timeout
        deadline = time.monotonic() + budget

        def hook(current: int, total: int | None) -> None:
            self._logger.debug(f"Transferred {current} of {total if total is not None else '?'} bytes")
            if time.monotonic() > deadline:
                raise ServiceRequestTimeoutError(message=Messages.TRANSFER_TIMED_OUT.format(blob_path, budget))

        return hook


def _as_utc(value: datetime | None) -> datetime | None:
    """Blob timestamps are UTC; attach the zone when the SDK hands back a naive value."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
