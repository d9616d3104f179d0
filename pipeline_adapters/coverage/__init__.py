"""
Code coverage enablers.

An enabler rewrites a project's build configuration so the next build collects
coverage. Properties arrive as the raw string map a build task hands over or as
a validated ``CoverageProperties``.

Shipped implementations:
- ``JacocoGradleCoverageEnabler``: JaCoCo for Gradle (single and multi module)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pipeline_adapters.coverage.filters import ClassFilters, extract_filters
from pipeline_adapters.models import CoverageProperties


@dataclass
class CoverageResult:
    """Outcome of enabling coverage; write failures are reported here instead of raised."""

    succeeded: bool
    build_file: str
    error: str | None = None


class CoverageEnabler(ABC):
    """Abstract base for coverage enablers."""

    @abstractmethod
    def enable_code_coverage(self, properties: CoverageProperties | dict[str, Any]) -> CoverageResult:
        """
        Inject coverage configuration into the build described by ``properties``.

        Args:
            properties: Typed properties or the raw property map

        Returns:
            CoverageResult describing whether the build file was updated

        Raises:
            pydantic.ValidationError: If the raw property map is invalid
        """


class JacocoCoverageEnabler(CoverageEnabler):
    """Shared behaviour for JaCoCo enablers."""

    def extract_filters(self, class_filter: str | None) -> ClassFilters:
        return extract_filters(class_filter)

    @staticmethod
    def _as_properties(properties: CoverageProperties | dict[str, Any]) -> CoverageProperties:
        if isinstance(properties, CoverageProperties):
            return properties
        return CoverageProperties.from_properties(properties)
