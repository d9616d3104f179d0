"""Azure blob artifact provider and Gradle JaCoCo coverage enabler for build pipelines."""

__version__ = "0.1.0"
