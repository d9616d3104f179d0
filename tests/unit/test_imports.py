"""Test that all production modules can be imported without errors."""

import importlib
import pkgutil
import sys


def test_all_modules_importable():
    """
    Import all production modules in the pipeline_adapters/ package to catch import errors.

    This test will fail if:
    - Any module uses features not available in the current Python version
    - Any import fails for any reason (missing dependencies, syntax errors, etc.)
    """
    import pipeline_adapters

    failed = []
    success_count = 0

    for _importer, modname, _ispkg in pkgutil.walk_packages(
        path=pipeline_adapters.__path__,
        prefix="pipeline_adapters.",
    ):
        try:
            importlib.import_module(modname)
            success_count += 1
        except Exception as e:
            failed.append(f"  {modname}: {type(e).__name__}: {e}")

    assert not failed, (
        f"Failed to import {len(failed)} module(s) on Python {sys.version_info.major}.{sys.version_info.minor}:\n"
        + "\n".join(failed)
        + f"\n\nSuccessfully imported {success_count} module(s)"
    )
