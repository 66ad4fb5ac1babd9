"""
Example token dictionary for demos and tests.

Builds a small themed dictionary: text and background colors with
dark-mode and high-contrast variants, a font size with no variants,
an intentionally empty group, and `original` provenance fields.
"""
from dvm.model import Dictionary, FileConfig, Platform


THEME_FIELDS = ["value", "value_darkMode", "value_hiContrast"]


def _prop(name: str, **values) -> dict:
    prop = {"name": name, "attributes": {"category": name.split("-")[0]}}
    prop.update(values)
    prop["original"] = dict(values)
    return prop


def build_example_dictionary() -> Dictionary:
    text = _prop("color-text", value="#222", value_darkMode="#ddd", value_hiContrast="#000")
    background = _prop("color-background", value="#fff", value_darkMode="#111")
    accent = _prop("color-accent", value_hiContrast="#00f")
    body = _prop("size-font-body", value="16px")

    properties = {
        "color": {
            "text": text,
            "background": background,
            "accent": accent,
        },
        "size": {
            "font": {
                "body": body,
            },
        },
        # Reserved for tokens added per brand.
        "brand": {},
    }

    return Dictionary(
        properties=properties,
        all_properties=[text, background, accent, body],
        metadata={"name": "Example Theme"},
    )


def build_example_platform() -> Platform:
    return Platform(
        name="web",
        value_transform_fields=list(THEME_FIELDS),
        files=[
            FileConfig(destination="tokens.json", value_field="value"),
            FileConfig(destination="tokens-dark.json", value_field=["value_darkMode", "value"]),
            FileConfig(destination="tokens-hicontrast.json", value_field=["value_hiContrast"]),
        ],
    )
