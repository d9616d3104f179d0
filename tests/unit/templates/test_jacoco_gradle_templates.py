"""Unit tests for the JaCoCo Gradle configuration templates."""

from pipeline_adapters.templates.jacoco_gradle import (
    multi_module_v1,
    multi_module_v2,
    single_module_v1,
    single_module_v2,
)

EXCLUDE = "'com/acme/Main.class'"
INCLUDE = "'com/acme/**'"


def test_single_module_v1_pre_gradle_5_assigns_class_directories():
    text = single_module_v1(EXCLUDE, INCLUDE, "build/classes", "cc", False)

    assert f"def jacocoExcludes = [{EXCLUDE}]" in text
    assert f"def jacocoIncludes = [{INCLUDE}]" in text
    assert 'classDirectories = fileTree(dir: "build/classes"' in text
    assert "append = true" in text
    assert 'destinationFile = file("cc/jacoco.exec")' in text
    assert 'html.destination file("cc")' in text


def test_single_module_v1_gradle_5_uses_set_from_and_drops_append():
    text = single_module_v1(EXCLUDE, INCLUDE, "build/classes", "cc", True)

    assert 'classDirectories.setFrom(fileTree(dir: "build/classes"' in text
    assert "append = true" not in text


def test_single_module_v2_uses_lazy_report_properties():
    text = single_module_v2(EXCLUDE, INCLUDE, None, "cc")

    assert "html.required = true" in text
    assert 'xml.outputLocation = file("cc/summary.xml")' in text
    assert "classDirectories.setFrom(files(classDirectories.files.collect {" in text
    assert "html.enabled" not in text


def test_multi_module_v1_adds_root_report():
    text = multi_module_v1(EXCLUDE, INCLUDE, "build/classes", "cc", False)

    assert "subprojects {" in text
    assert "task jacocoRootReport(type: org.gradle.testing.jacoco.tasks.JacocoReport)" in text
    assert "executionData = files(subprojects.jacocoTestReport.executionData)" in text
    assert "classDirectories += fileTree(dir: dir" in text
    assert 'html.destination file("${buildDir}/jacocoHtml")' in text
    assert 'xml.destination file("cc/summary.xml")' in text


def test_multi_module_v1_gradle_5_uses_file_collection_api():
    text = multi_module_v1(EXCLUDE, INCLUDE, "build/classes", "cc", True)

    assert "executionData.setFrom(files(subprojects.jacocoTestReport.executionData))" in text
    assert "classDirectories.from(fileTree(dir: dir" in text
    assert "append = true" not in text


def test_multi_module_v2_collects_subproject_outputs():
    text = multi_module_v2(EXCLUDE, INCLUDE, None, "cc")

    assert "dependsOn subprojects.test" in text
    assert "executionData.setFrom(project.fileTree(dir: '.', include: '**/build/jacoco/test.exec'))" in text
    assert 'html.outputLocation = file("cc")' in text
    assert "html.enabled" not in text


def test_templates_start_on_a_new_line():
    """Appended blocks must not run into the last line of the existing build file."""
    for template in (single_module_v1, single_module_v2, multi_module_v1, multi_module_v2):
        assert template(EXCLUDE, INCLUDE, None, "cc", False).startswith("\n")
