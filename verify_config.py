#!/usr/bin/env python3
"""Simple script to verify config.example.yaml structure without loading the package."""

import yaml
from pathlib import Path

VALID_SORTS = ['date_desc', 'date_asc', 'company_az']
VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
VALID_FORMATS = ['json', 'key-value']


def verify_config_structure(config_file: Path = Path("config.example.yaml")):
    """Verify a config file has the expected structure."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}
    except Exception as e:
        print(f"✗ Failed to parse {config_file}: {e}")
        return False

    errors = []

    if not isinstance(config, dict):
        print(f"✗ {config_file} must contain a mapping")
        return False

    # Every section is optional but must be a mapping when present
    for key in ['normalization', 'channels', 'batch', 'directory', 'logging']:
        if key in config and not isinstance(config[key], dict):
            errors.append(f"'{key}' must be a dictionary")

    normalization = config.get('normalization', {})
    if isinstance(normalization, dict):
        for key in ['display_tag_cap', 'index_tag_cap']:
            value = normalization.get(key, 0)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(f"normalization.{key} must be a non-negative integer")

    channels = config.get('channels', {})
    if isinstance(channels, dict):
        for key in ['network_domains', 'job_board_domains', 'careers_path_markers',
                    'disqualified_company_domains']:
            if key in channels and not isinstance(channels[key], list):
                errors.append(f"channels.{key} must be a list")
        if 'network_domains' in channels and not channels['network_domains']:
            errors.append("channels.network_domains must not be empty")

    batch = config.get('batch', {})
    if isinstance(batch, dict):
        workers = batch.get('max_workers', 1)
        if not isinstance(workers, int) or not 1 <= workers <= 64:
            errors.append("batch.max_workers must be an integer between 1 and 64")

    directory = config.get('directory', {})
    if isinstance(directory, dict) and directory.get('default_sort', 'date_desc') not in VALID_SORTS:
        errors.append(f"directory.default_sort must be one of: {', '.join(VALID_SORTS)}")

    logging_section = config.get('logging', {})
    if isinstance(logging_section, dict):
        if logging_section.get('level', 'INFO') not in VALID_LEVELS:
            errors.append(f"logging.level must be one of: {', '.join(VALID_LEVELS)}")
        if logging_section.get('format', 'key-value') not in VALID_FORMATS:
            errors.append(f"logging.format must be one of: {', '.join(VALID_FORMATS)}")

    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print(f"✓ {config_file} structure is valid")
    print(f"  - Display tag cap: {normalization.get('display_tag_cap', 6)}")
    print(f"  - Index tag cap: {normalization.get('index_tag_cap', 20)}")
    print(f"  - {len(channels.get('network_domains', []))} network domains")
    print(f"  - {len(channels.get('job_board_domains', []))} job board domains")
    print(f"  - Default sort: {directory.get('default_sort', 'date_desc')}")
    return True


if __name__ == "__main__":
    import sys
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    success = verify_config_structure(path)
    sys.exit(0 if success else 1)
