"""
Demo: Map the example theme onto its light, dark and high-contrast values.
"""

from dvm.analyzer import analyze_dictionary, format_report
from dvm.build import build_platform
from dvm.examples import build_example_dictionary, build_example_platform
from dvm.serialization import dictionary_to_json


def main():
    dictionary = build_example_dictionary()
    platform = build_example_platform()

    print("=" * 70)
    print("SOURCE DICTIONARY")
    print("=" * 70)
    print(format_report(analyze_dictionary(dictionary, platform)))
    print()

    for destination, mapped in build_platform(dictionary, platform).items():
        file_config = platform.get_file(destination)
        print("=" * 70)
        print(f"{destination}  (valueField={file_config.value_field})")
        print("=" * 70)
        print(dictionary_to_json(mapped))
        print()


if __name__ == "__main__":
    main()
