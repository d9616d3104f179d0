"""
Command line entry point for pipeline_adapters.

Can be called:
- As Python functions: from pipeline_adapters.main import list_items; list_items(config)
- Via CLI: python -m pipeline_adapters.main list
           python -m pipeline_adapters.main enable-coverage --build-file build.gradle --report-directory cc
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from pipeline_adapters.config import Config, get_config, setup_logging
from pipeline_adapters.coverage import CoverageResult
from pipeline_adapters.coverage.jacoco_gradle import JacocoGradleCoverageEnabler
from pipeline_adapters.models import ArtifactItem, CoverageProperties
from pipeline_adapters.providers.azure_blob import AzureBlobProvider

logger = logging.getLogger(__name__)


def _provider(config: Config) -> AzureBlobProvider:
    return AzureBlobProvider(config.container_reference(), settings=config.transfer_settings())


def list_items(config: Config) -> list[ArtifactItem]:
    """List the items under the configured container prefix."""
    provider = _provider(config)
    try:
        return provider.get_root_items()
    finally:
        provider.dispose()


def download_item(config: Config, item_path: str, output_dir: Path) -> Path:
    """
    Download one item into ``output_dir``.

    Returns:
        Local path of the downloaded file (named after the item's basename)
    """
    provider = _provider(config)
    item = ArtifactItem(path=item_path)
    try:
        downloader = provider.get_item(item)
        output_dir.mkdir(parents=True, exist_ok=True)
        local_path = output_dir / item.path
        with open(local_path, "wb") as f:
            downloader.readinto(f)
    finally:
        provider.dispose()

    logger.info(f"Downloaded {item_path} to {local_path}")
    return local_path


def upload_file(config: Config, local_path: Path, item_path: str | None = None) -> ArtifactItem:
    """Upload a local file; the item path defaults to the file name."""
    provider = _provider(config)
    item = ArtifactItem(path=item_path or local_path.name, file_length=local_path.stat().st_size)
    try:
        with open(local_path, "rb") as f:
            return provider.put_item(item, f)
    finally:
        provider.dispose()


def enable_coverage(properties: CoverageProperties) -> CoverageResult:
    return JacocoGradleCoverageEnabler().enable_code_coverage(properties)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Blob artifact transfers and Gradle JaCoCo coverage setup",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config-file", type=str, help="YAML configuration file (sets CONFIG_FILE)")
    parser.add_argument("--log-level", type=str, help="Override the configured log level")

    # Storage overrides
    parser.add_argument("--storage-account", type=str, help="Azure storage account name")
    parser.add_argument("--storage-container", type=str, help="Blob container name")
    parser.add_argument("--storage-prefix", type=str, help="Folder inside the container that scopes all items")
    parser.add_argument("--storage-account-url", type=str, help="Blob service endpoint override")
    parser.add_argument(
        "--keep-prefix", action="store_true", default=None, help="Keep the prefix on listed and downloaded paths"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List items under the container prefix (JSON lines)")

    download = subparsers.add_parser("download", help="Download one item")
    download.add_argument("path", help="Item path as returned by 'list'")
    download.add_argument("--output-dir", type=Path, default=Path("."), help="Destination directory")

    upload = subparsers.add_parser("upload", help="Upload a local file")
    upload.add_argument("file", type=Path, help="Local file to upload")
    upload.add_argument("--path", type=str, help="Item path inside the prefix (default: file name)")

    coverage = subparsers.add_parser("enable-coverage", help="Append JaCoCo configuration to a Gradle build file")
    coverage.add_argument("--build-file", required=True, help="Gradle build file to modify")
    coverage.add_argument("--report-directory", required=True, help="Directory for coverage reports")
    coverage.add_argument("--class-filter", help="Comma-separated filters, e.g. '+com.acme.*,-com.acme.Main'")
    coverage.add_argument("--class-file-directories", help="Directory holding compiled classes")
    coverage.add_argument("--multi-module", action="store_true", help="Project is a multi-module build")
    coverage.add_argument("--gradle-major-version", type=int, help="Major version of Gradle used by the project")
    coverage.add_argument("--gradle-5x-or-higher", action="store_true", help="Gradle 5.x or newer (V1 templates)")

    return parser


def cli(argv: list[str] | None = None) -> int:
    """Run the command line interface and return a process exit code."""
    args = build_parser().parse_args(argv)

    # Set CONFIG_FILE environment variable if provided (get_config() will read it)
    if args.config_file:
        os.environ["CONFIG_FILE"] = args.config_file

    try:
        config = get_config(
            log_level=args.log_level,
            storage_account=args.storage_account,
            storage_container=args.storage_container,
            storage_prefix=args.storage_prefix,
            storage_account_url=args.storage_account_url,
            keep_prefix=args.keep_prefix,
        )
        setup_logging(config)

        if args.command == "list":
            for item in list_items(config):
                print(json.dumps(item.to_dict(encode_json=True)))
        elif args.command == "download":
            download_item(config, args.path, args.output_dir)
        elif args.command == "upload":
            item = upload_file(config, args.file, args.path)
            print(item.to_json())
        elif args.command == "enable-coverage":
            properties = CoverageProperties(
                build_file=args.build_file,
                class_filter=args.class_filter,
                is_multi_module=args.multi_module,
                class_file_directories=args.class_file_directories,
                report_directory=args.report_directory,
                gradle_5x_or_higher=args.gradle_5x_or_higher,
                gradle_major_version=args.gradle_major_version,
            )
            result = enable_coverage(properties)
            if not result.succeeded:
                return 1
        return 0

    except KeyboardInterrupt:
        return 130

    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(cli())
