"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    # Display cap above the index cap means tag filters miss shown tags
    normalization = config_dict.get("normalization", {})
    if isinstance(normalization, dict):
        display_cap = normalization.get("display_tag_cap", 6)
        index_cap = normalization.get("index_tag_cap", 20)
        if isinstance(display_cap, int) and isinstance(index_cap, int) and display_cap > index_cap:
            warning_messages.append(
                f"display_tag_cap ({display_cap}) exceeds index_tag_cap ({index_cap}); "
                "tags shown on a record may not be filterable"
            )

    channels = config_dict.get("channels", {})
    if isinstance(channels, dict):
        markers = channels.get("careers_path_markers")
        if isinstance(markers, list) and not markers:
            warning_messages.append(
                "careers_path_markers is empty; only job-board domains will count as careers pages"
            )

        # Check for duplicate domains across lists
        for key in ("network_domains", "job_board_domains", "disqualified_company_domains"):
            domains = channels.get(key, [])
            if isinstance(domains, list):
                normalized = [d.strip().lower() for d in domains if isinstance(d, str)]
                if len(normalized) != len(set(normalized)):
                    duplicates = set([d for d in normalized if normalized.count(d) > 1])
                    warning_messages.append(
                        f"Duplicate entries in {key} will be deduplicated: {', '.join(sorted(duplicates))}"
                    )

    batch = config_dict.get("batch", {})
    if isinstance(batch, dict):
        max_workers = batch.get("max_workers", 1)
        if isinstance(max_workers, int) and max_workers > 16:
            warning_messages.append(
                f"Large max_workers ({max_workers}) rarely helps; normalization is CPU-bound"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
