"""
JaCoCo coverage enabler for Gradle builds.

Picks one of four configuration templates along two independent axes, module
type (single/multi) and template version (V1 below Gradle 6, V2 from Gradle 6),
and appends the rendered block to the build file.
"""

import logging
from typing import Any, Callable

from pipeline_adapters.constants import Messages, ModuleType, TemplateVersion
from pipeline_adapters.coverage import CoverageResult, JacocoCoverageEnabler
from pipeline_adapters.coverage.filters import apply_filter_pattern
from pipeline_adapters.models import CoverageProperties
from pipeline_adapters.templates import jacoco_gradle
from pipeline_adapters.utils.files import append_text_to_file

TemplateFn = Callable[[str, str, str | None, str, bool], str]

JACOCO_GRADLE_TEMPLATES: dict[tuple[str, str], TemplateFn] = {
    (ModuleType.MULTI, TemplateVersion.V1): jacoco_gradle.multi_module_v1,
    (ModuleType.MULTI, TemplateVersion.V2): jacoco_gradle.multi_module_v2,
    (ModuleType.SINGLE, TemplateVersion.V1): jacoco_gradle.single_module_v1,
    (ModuleType.SINGLE, TemplateVersion.V2): jacoco_gradle.single_module_v2,
}


class UnsupportedTemplateError(ValueError):
    """Raised when no template exists for a module type / template version combination."""


def template_version_for(gradle_major_version: int | None) -> str:
    """V2 from Gradle 6 on; an unknown version falls back to V1."""
    if gradle_major_version is not None and gradle_major_version >= TemplateVersion.MIN_GRADLE_FOR_V2:
        return TemplateVersion.V2
    return TemplateVersion.V1


def get_template(module_type: str, template_version: str) -> TemplateFn:
    """
    Look up the template generator for a combination.

    Raises:
        UnsupportedTemplateError: If the combination is not registered
    """
    try:
        return JACOCO_GRADLE_TEMPLATES[(module_type, template_version)]
    except KeyError:
        raise UnsupportedTemplateError(Messages.UNSUPPORTED_TEMPLATE.format(module_type, template_version)) from None


def select_template(is_multi_module: bool, gradle_major_version: int | None) -> TemplateFn:
    module_type = ModuleType.MULTI if is_multi_module else ModuleType.SINGLE
    template_version = template_version_for(gradle_major_version)
    logging.getLogger(__name__).debug(
        f"Gradle module type: {module_type}, Gradle version: {gradle_major_version}, "
        f"Template version: {template_version}"
    )
    return get_template(module_type, template_version)


class JacocoGradleCoverageEnabler(JacocoCoverageEnabler):
    """
    Enable JaCoCo coverage for a Gradle build.

    Usage::

        result = JacocoGradleCoverageEnabler().enable_code_coverage(
            {"buildfile": "build.gradle", "classfilter": "+com.acme.*", "reportdirectory": "cc"}
        )
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(__name__)

    def enable_code_coverage(self, properties: CoverageProperties | dict[str, Any]) -> CoverageResult:
        props = self._as_properties(properties)
        self._logger.debug(f"Input parameters: {props.model_dump()}")

        config_text = self.render(props)

        try:
            self._logger.debug(f"Code coverage data will be appended to build file: {props.build_file}")
            append_text_to_file(props.build_file, config_text)
            self._logger.debug("Appended code coverage data")
        except OSError as e:
            message = Messages.FAILED_TO_APPEND_CC.format(e)
            self._logger.warning(message)
            return CoverageResult(succeeded=False, build_file=props.build_file, error=message)

        return CoverageResult(succeeded=True, build_file=props.build_file)

    def render(self, props: CoverageProperties) -> str:
        """
        Render the configuration block without touching the build file.

        Raises:
            InvalidClassFilterError: If the class filter is malformed
            UnsupportedTemplateError: If no template matches the properties
        """
        filters = self.extract_filters(props.class_filter)
        jacoco_exclude = apply_filter_pattern(filters.exclude_filter)
        jacoco_include = apply_filter_pattern(filters.include_filter)

        template = select_template(props.is_multi_module, props.gradle_major_version)
        return template(
            ",".join(jacoco_exclude),
            ",".join(jacoco_include),
            props.class_file_directories,
            props.report_directory,
            props.gradle_5x_or_higher,
        )
