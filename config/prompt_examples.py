"""
Example prompt catalog for SiteCraft

The same list feeds the type-ahead suggestions and the preset buttons.
"""

from typing import List

PROMPT_EXAMPLES: List[str] = [
    "Create a simple portfolio website for a photographer named Alex Doe.",
    "Generate a landing page for a new SaaS product called 'TaskMaster'.",
    "Build a blog homepage with a featured post section and a list of recent articles.",
    "Design a coming soon page with an email signup form.",
    "Generate a product page for an e-commerce store selling handmade pottery.",
    "Create a clean, minimalist website for a freelance writer.",
    "Build a single-page website for a local coffee shop, including menu and location.",
    "Generate a website for a tech conference.",
]

PRESET_LABEL_LENGTH = 30


def preset_label(prompt: str) -> str:
    """Shorten a preset prompt for display on a button."""
    if len(prompt) > PRESET_LABEL_LENGTH:
        return f"{prompt[:PRESET_LABEL_LENGTH - 3]}..."
    return prompt


def get_presets() -> List[dict]:
    """Get presets with their display labels for the frontend."""
    return [{"prompt": example, "label": preset_label(example)} for example in PROMPT_EXAMPLES]
