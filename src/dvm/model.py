"""
Core Dictionary Model Objects

Defines the data structures the value mapper consumes and produces.

These are plain data classes representing:
    - Dictionaries (the two views over token properties)
    - Platforms (the execution context: recognized value fields)
    - File configs (one output of a platform, with its value field)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about output formats
        - Hold token data as plain dicts/lists (JSON-shaped)
        - Are never mutated by the mapper
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


ValueField = Union[None, str, List[str]]


DEFAULT_VALUE_TRANSFORM_FIELDS = ["value"]


@dataclass
class Dictionary:
    """
    A token dictionary, exposed through two views over the same properties.

    Properties:
        properties:
            The canonical nested tree. Groups are dicts of further nodes,
            leaves (properties) are dicts holding at least one value field.
            Example: {"color": {"text": {"value": "#222"}}}

        all_properties:
            Flat ordered list of the leaves of `properties`.
            The two views are expected to alias the same leaves, but
            nothing enforces it; the mapper transforms them independently.

        metadata:
            Any other top-level keys of the source document.
            Passed through unchanged by the mapper.
    """

    properties: Dict[str, Any] = field(default_factory=dict)
    all_properties: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FileConfig:
    """
    One output of a platform.

    Properties:
        destination: Output file name (e.g. "colors-night.json")
        value_field: Candidate value fields for this output, in priority order.
            None means "no selection": the dictionary is used unchanged.
        format: Serialization of the output ("json" or "yaml")
    """

    destination: str
    value_field: ValueField = None
    format: str = "json"


@dataclass
class Platform:
    """
    Execution context for a value-mapping pass.

    Properties:
        name:
            Platform identifier (e.g. "android", "web")

        value_transform_fields:
            Every field name that can hold a value variant on this platform.
            Used to tell properties from groups, and stripped from every
            mapped property except the selected `value`.

        files:
            Outputs to build for this platform
    """

    name: str = ""
    value_transform_fields: List[str] = field(
        default_factory=lambda: list(DEFAULT_VALUE_TRANSFORM_FIELDS)
    )
    files: List[FileConfig] = field(default_factory=list)

    def get_file(self, destination: str) -> Optional[FileConfig]:
        """
        Retrieve a file config by destination.

        Args:
            destination: Output file name

        Returns:
            FileConfig or None if not found
        """
        for file_config in self.files:
            if file_config.destination == destination:
                return file_config
        return None
