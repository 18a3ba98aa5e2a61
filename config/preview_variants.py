"""
Preview presentation variants for SiteCraft

Each variant fixes the reset background of the preview document and the
sandbox tokens granted to the iframe that renders it.
"""

from typing import Dict, Tuple, TypedDict


class PreviewVariant(TypedDict):
    """Type definition for a preview variant."""
    background: str
    sandbox: Tuple[str, ...]
    purpose: str


PREVIEW_VARIANTS: Dict[str, PreviewVariant] = {
    "isolated": {
        "background": "white",
        "sandbox": ("allow-scripts",),
        "purpose": "Scripts run in an opaque origin with no access to the host page",
    },
    "blended": {
        "background": "transparent",
        # allow-scripts together with allow-same-origin lets the frame reach the host origin
        "sandbox": ("allow-scripts", "allow-same-origin"),
        "purpose": "Transparent preview that blends into the host page",
    },
}

DEFAULT_VARIANT = "isolated"


def validate_variant_name(variant_name: str) -> bool:
    """Check if a variant name is valid."""
    return variant_name in PREVIEW_VARIANTS


def get_variant(variant_name: str) -> PreviewVariant:
    """
    Get a preview variant by name.

    Raises:
        KeyError: If the variant name is not found
    """
    if variant_name not in PREVIEW_VARIANTS:
        raise KeyError(f"Variant '{variant_name}' not found. Available variants: {list(PREVIEW_VARIANTS.keys())}")
    return PREVIEW_VARIANTS[variant_name]


def sandbox_attribute(variant_name: str) -> str:
    """Space-separated sandbox tokens for the variant."""
    return " ".join(get_variant(variant_name)["sandbox"])
