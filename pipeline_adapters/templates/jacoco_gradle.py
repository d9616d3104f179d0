"""
JaCoCo configuration blocks for Gradle build files (Groovy DSL).

Each generator returns text meant to be appended to an existing build.gradle.
V1 generators target Gradle < 6 (``enabled``/``destination`` report settings),
V2 generators target Gradle 6+ (``required``/``outputLocation`` and lazy
``setFrom`` file collections).

All generators share one signature::

    generator(exclude, include, class_file_directories, report_directory, gradle_5x_or_higher) -> str

``exclude`` and ``include`` are comma-joined quoted Ant patterns as produced by
``apply_filter_pattern``.
"""

from textwrap import dedent, indent


def _filter_declarations(exclude: str, include: str) -> str:
    return f"def jacocoExcludes = [{exclude}]\ndef jacocoIncludes = [{include}]\n"


def _class_tree(class_file_directories: str | None) -> str:
    """Groovy expression for the filtered class files of the current project."""
    if class_file_directories:
        return f'fileTree(dir: "{class_file_directories}", excludes: jacocoExcludes, includes: jacocoIncludes)'
    return (
        "files(classDirectories.files.collect {\n"
        "    fileTree(dir: it, excludes: jacocoExcludes, includes: jacocoIncludes)\n"
        "})"
    )


def _assign_class_directories(class_file_directories: str | None, use_set_from: bool) -> str:
    tree = _class_tree(class_file_directories)
    if use_set_from:
        return f"classDirectories.setFrom({tree})"
    return f"classDirectories = {tree}"


_REPOSITORIES = """
allprojects {
    repositories {
        mavenCentral()
    }

    apply plugin: 'jacoco'
}
"""


def single_module_v1(
    exclude: str,
    include: str,
    class_file_directories: str | None,
    report_directory: str,
    gradle_5x_or_higher: bool = False,
) -> str:
    class_dirs = indent(_assign_class_directories(class_file_directories, gradle_5x_or_higher), " " * 8)
    # Gradle 5 dropped JacocoTaskExtension.append
    append = "" if gradle_5x_or_higher else "        append = true\n"
    return (
        _REPOSITORIES
        + "\n"
        + _filter_declarations(exclude, include)
        + "\njacocoTestReport {\n"
        + "    doFirst {\n"
        + f"{class_dirs}\n"
        + "    }\n"
        + "\n"
        + "    reports {\n"
        + "        html.enabled = true\n"
        + "        xml.enabled = true\n"
        + f'        xml.destination file("{report_directory}/summary.xml")\n'
        + f'        html.destination file("{report_directory}")\n'
        + "    }\n"
        + "}\n"
        + "\n"
        + "test {\n"
        + "    finalizedBy jacocoTestReport\n"
        + "    jacoco {\n"
        + append
        + f'        destinationFile = file("{report_directory}/jacoco.exec")\n'
        + "    }\n"
        + "}\n"
    )


def single_module_v2(
    exclude: str,
    include: str,
    class_file_directories: str | None,
    report_directory: str,
    gradle_5x_or_higher: bool = True,
) -> str:
    class_dirs = indent(_assign_class_directories(class_file_directories, True), " " * 8)
    return (
        "\napply plugin: 'jacoco'\n"
        + "\n"
        + _filter_declarations(exclude, include)
        + "\njacocoTestReport {\n"
        + "    dependsOn test\n"
        + "\n"
        + "    afterEvaluate {\n"
        + f"{class_dirs}\n"
        + "    }\n"
        + "\n"
        + "    reports {\n"
        + "        html.required = true\n"
        + "        xml.required = true\n"
        + f'        xml.outputLocation = file("{report_directory}/summary.xml")\n'
        + f'        html.outputLocation = file("{report_directory}")\n'
        + "    }\n"
        + "}\n"
        + "\n"
        + "test {\n"
        + "    finalizedBy jacocoTestReport\n"
        + "    jacoco {\n"
        + f'        destinationFile = file("{report_directory}/jacoco.exec")\n'
        + "    }\n"
        + "}\n"
    )


def multi_module_v1(
    exclude: str,
    include: str,
    class_file_directories: str | None,
    report_directory: str,
    gradle_5x_or_higher: bool = False,
) -> str:
    class_dirs = indent(_assign_class_directories(class_file_directories, gradle_5x_or_higher), " " * 12)
    append = "" if gradle_5x_or_higher else "            append = true\n"
    if gradle_5x_or_higher:
        root_collections = dedent(
            """\
                executionData.setFrom(files(subprojects.jacocoTestReport.executionData))
                sourceDirectories.setFrom(files(subprojects.sourceSets.main.allSource.srcDirs))
                classDirectories.setFrom(files())
            """
        )
        add_classes = "classDirectories.from(fileTree(dir: dir, includes: jacocoIncludes, excludes: jacocoExcludes))"
    else:
        root_collections = dedent(
            """\
                executionData = files(subprojects.jacocoTestReport.executionData)
                sourceDirectories = files(subprojects.sourceSets.main.allSource.srcDirs)
                classDirectories = files()
            """
        )
        add_classes = "classDirectories += fileTree(dir: dir, includes: jacocoIncludes, excludes: jacocoExcludes)"

    return (
        _REPOSITORIES
        + "\n"
        + _filter_declarations(exclude, include)
        + "\nsubprojects {\n"
        + "    jacocoTestReport {\n"
        + "        doFirst {\n"
        + f"{class_dirs}\n"
        + "        }\n"
        + "\n"
        + "        reports {\n"
        + "            html.enabled = true\n"
        + '            html.destination file("${buildDir}/jacocoHtml")\n'
        + "            xml.enabled = true\n"
        + '            xml.destination file("${buildDir}/summary.xml")\n'
        + "        }\n"
        + "    }\n"
        + "\n"
        + "    test {\n"
        + "        jacoco {\n"
        + append
        + f'            destinationFile = file("{report_directory}/jacoco.exec")\n'
        + "        }\n"
        + "    }\n"
        + "}\n"
        + "\n"
        + "task jacocoRootReport(type: org.gradle.testing.jacoco.tasks.JacocoReport) {\n"
        + "    dependsOn = subprojects.test\n"
        + indent(root_collections, " " * 4)
        + "\n"
        + "    doFirst {\n"
        + "        subprojects.each { subproject ->\n"
        + "            subproject.sourceSets.main.output.classesDirs.each { dir ->\n"
        + "                if (dir.exists()) {\n"
        + '                    logger.info("Adding class files from ${dir}")\n'
        + f"                    {add_classes}\n"
        + "                } else {\n"
        + '                    logger.info("Class directory does not exist in sub project: ${subproject.name}")\n'
        + "                }\n"
        + "            }\n"
        + "        }\n"
        + "    }\n"
        + "\n"
        + "    reports {\n"
        + "        html.enabled = true\n"
        + "        xml.enabled = true\n"
        + f'        xml.destination file("{report_directory}/summary.xml")\n'
        + f'        html.destination file("{report_directory}/")\n'
        + "    }\n"
        + "}\n"
    )


def multi_module_v2(
    exclude: str,
    include: str,
    class_file_directories: str | None,
    report_directory: str,
    gradle_5x_or_higher: bool = True,
) -> str:
    class_dirs = indent(_assign_class_directories(class_file_directories, True), " " * 12)
    return (
        _REPOSITORIES
        + "\n"
        + _filter_declarations(exclude, include)
        + "\nsubprojects {\n"
        + "    jacocoTestReport {\n"
        + "        afterEvaluate {\n"
        + f"{class_dirs}\n"
        + "        }\n"
        + "\n"
        + "        reports {\n"
        + "            html.required = true\n"
        + '            html.outputLocation = file("${buildDir}/jacocoHtml")\n'
        + "            xml.required = true\n"
        + '            xml.outputLocation = file("${buildDir}/summary.xml")\n'
        + "        }\n"
        + "    }\n"
        + "\n"
        + "    test {\n"
        + "        finalizedBy jacocoTestReport\n"
        + "    }\n"
        + "}\n"
        + "\n"
        + "task jacocoRootReport(type: org.gradle.testing.jacoco.tasks.JacocoReport) {\n"
        + "    dependsOn subprojects.test\n"
        + "    executionData.setFrom(project.fileTree(dir: '.', include: '**/build/jacoco/test.exec'))\n"
        + "    sourceDirectories.setFrom(files(subprojects.sourceSets.main.allSource.srcDirs))\n"
        + "\n"
        + "    afterEvaluate {\n"
        + "        classDirectories.setFrom(files(subprojects.collect { subproject ->\n"
        + "            subproject.sourceSets.main.output.classesDirs.collect { dir ->\n"
        + "                fileTree(dir: dir, excludes: jacocoExcludes, includes: jacocoIncludes)\n"
        + "            }\n"
        + "        }))\n"
        + "    }\n"
        + "\n"
        + "    reports {\n"
        + "        html.required = true\n"
        + "        xml.required = true\n"
        + f'        xml.outputLocation = file("{report_directory}/summary.xml")\n'
        + f'        html.outputLocation = file("{report_directory}")\n'
        + "    }\n"
        + "}\n"
    )
