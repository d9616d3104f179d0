#!/usr/bin/env python3
"""
Generate config.yaml.template from Pydantic schema.

This script introspects the Config Pydantic model and generates a YAML template
showing all available configuration options with:
- Field names
- Types
- Default values
- Descriptions

Usage:
    python scripts/generate_config_template.py > config.yaml.template
"""

import sys
from pathlib import Path

# Add pipeline_adapters to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pipeline_adapters.config import Config


CATEGORIES = {
    "Storage Settings": [
        "storage_account",
        "storage_access_key",
        "storage_container",
        "storage_prefix",
        "storage_account_url",
        "keep_prefix",
    ],
    "Transfer Settings": [
        "upload_block_size",
        "upload_max_concurrency",
        "transfer_timeout",
        "download_max_retries",
        "list_page_size",
    ],
    "Logging Settings": [
        "log_level",
    ],
}


def format_value(value):
    """Format a value for YAML output."""
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return str(value).lower()
    elif isinstance(value, str):
        return f'"{value}"'
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, list):
        if not value:
            return "[]"
        return f"[{', '.join(format_value(v) for v in value)}]"
    else:
        return str(value)


def generate_template() -> str:
    """Generate config template from Pydantic schema."""
    schema = Config.model_json_schema()
    properties = schema.get("properties", {})

    lines = [
        "# " + "=" * 60,
        "# Pipeline Adapters Configuration Template (AUTO-GENERATED)",
        "# " + "=" * 60,
        "#",
        "# Uncomment and modify values to override defaults.",
        "# Values may reference environment variables as ${VAR_NAME}.",
        "#",
        "# Generated from: pipeline_adapters/config.py (Config Pydantic model)",
        "# To regenerate: python scripts/generate_config_template.py > config.yaml.template",
        "",
    ]

    for category, fields in CATEGORIES.items():
        lines += [f"# {'-' * 60}", f"# {category}", f"# {'-' * 60}", ""]

        for field_name in fields:
            if field_name not in properties:
                continue

            field_info = properties[field_name]
            field_type = field_info.get("type", "unknown")
            if "anyOf" in field_info:
                field_type = " | ".join(t.get("type", "unknown") for t in field_info["anyOf"])
            default = field_info.get("default")

            lines += [
                f"# {field_info.get('description', 'No description')}",
                f"# Type: {field_type}",
                f"# Default: {format_value(default)}",
                f"# {field_name}: {format_value(default)}",
                "",
            ]

    lines += [
        "# " + "=" * 60,
        "# Example: Shared-key access to a scoped folder",
        "# " + "=" * 60,
        "#",
        '# storage_account: "mystorageaccount"',
        '# storage_access_key: "${AZURE_STORAGE_KEY}"',
        '# storage_container: "drops"',
        '# storage_prefix: "builds/1234"',
    ]
    return "\n".join(lines)


if __name__ == "__main__":
    print(generate_template())
