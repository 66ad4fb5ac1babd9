"""
Platform build: one value-mapped dictionary per configured output.
"""

import logging
from pathlib import Path
from typing import Dict, Union

from dvm.config import check_unique_destinations
from dvm.mapper import map_dictionary_value
from dvm.model import Dictionary, Platform
from dvm.serialization import dump_dictionary


log = logging.getLogger(__name__)


def build_platform(dictionary: Dictionary, platform: Platform) -> Dict[str, Dictionary]:
    """
    Map the dictionary once per file of the platform.

    Returns:
        Mapped dictionaries keyed by file destination. Files without a
        value field receive the input dictionary itself.

    Raises:
        PlatformConfigError: If two files share a destination.
    """
    check_unique_destinations(platform.files, where=f"Platform '{platform.name}'")
    outputs: Dict[str, Dictionary] = {}
    for file_config in platform.files:
        outputs[file_config.destination] = map_dictionary_value(
            dictionary, file_config.value_field, platform
        )
        log.debug(
            "Built %s for platform %s with value field %s",
            file_config.destination,
            platform.name,
            file_config.value_field,
        )
    return outputs


def write_platform(
    dictionary: Dictionary,
    platform: Platform,
    output_dir: Union[str, Path],
) -> Dict[str, Path]:
    """
    Build and write every file of the platform under output_dir.

    Returns:
        Written paths keyed by destination
    """
    output_dir = Path(output_dir)
    written: Dict[str, Path] = {}
    for destination, mapped in build_platform(dictionary, platform).items():
        file_config = platform.get_file(destination)
        target = output_dir / destination
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dump_dictionary(mapped, file_config.format), encoding="utf-8")
        written[destination] = target
    return written


__all__ = ["build_platform", "write_platform"]
