"""
Dictionary Value Mapper (DVM) Package

Selects one value field per design token property and prunes everything
that has nothing to show for the selection.

A token dictionary arrives with several candidate value fields per
property (value, value_darkMode, value_hiContrast, ...). A format asks
for one of them, in priority order. This package produces a new
dictionary where every surviving property exposes exactly one `value`.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Output formats (CSS, XML, Swift, ...)
    - Reference resolution between tokens
    - Merging of source files

Inputs are never mutated. Every operation returns new structures.
"""

from dvm.mapper import (
    MalformedDictionary,
    MissingRecognizedFields,
    ValueMappingError,
    map_dictionary_value,
    normalize_value_fields,
)
from dvm.model import Dictionary, FileConfig, Platform

__version__ = "0.1.0"

__all__ = [
    "Dictionary",
    "FileConfig",
    "Platform",
    "MalformedDictionary",
    "MissingRecognizedFields",
    "ValueMappingError",
    "map_dictionary_value",
    "normalize_value_fields",
]
