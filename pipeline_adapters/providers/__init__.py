"""
Artifact provider interface and implementations.

A provider adapts one storage backend to the operations a transfer engine
drives: list the root items, stream a single item down, stream an item up.

Shipped implementations:
- ``AzureBlobProvider``: Azure Blob Storage container (flat listing only)
"""

from abc import ABC, abstractmethod
from typing import BinaryIO

from pipeline_adapters.models import ArtifactItem


class OperationNotSupportedError(NotImplementedError):
    """Raised when a provider is asked for an operation its backend cannot serve."""


class ArtifactProvider(ABC):
    """
    Abstract base for artifact providers.

    Items are mutated in place by ``get_item`` and ``put_item`` so the caller
    sees the provider's view of the item (local file name, destination URL).
    """

    @abstractmethod
    def get_root_items(self) -> list[ArtifactItem]:
        """
        List the items at the provider's root.

        Returns:
            Items in the order the backend listed them
        """

    @abstractmethod
    def get_items(self, item: ArtifactItem) -> list[ArtifactItem]:
        """
        List the children of a folder item.

        Raises:
            OperationNotSupportedError: If the provider only lists one level
        """

    @abstractmethod
    def get_item(self, item: ArtifactItem) -> BinaryIO:
        """
        Open a readable stream for an item.

        Args:
            item: Item previously returned by ``get_root_items``

        Returns:
            Readable stream over the item content
        """

    @abstractmethod
    def put_item(self, item: ArtifactItem, stream: BinaryIO) -> ArtifactItem:
        """
        Store the content of ``stream`` under the item's path.

        Args:
            item: Item describing the destination path
            stream: Readable binary stream

        Returns:
            The same item, updated with provider metadata
        """

    def dispose(self) -> None:
        """
        Release provider resources.

        Default: no-op.
        """
