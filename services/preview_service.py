"""
Preview rendering for SiteCraft

The preview document is rebuilt from scratch for every change and shown in a
sandboxed iframe. A new generation never patches the previous frame: the old
frame is destroyed and a fresh one with a new key is created, so the generated
script always starts from a clean global scope.
"""
import html as html_lib
import logging
import re
from dataclasses import dataclass
from typing import Optional

from config.preview_variants import DEFAULT_VARIANT, get_variant, sandbox_attribute
from models.generation import GeneratedCode

logger = logging.getLogger(__name__)

# Network access is denied; inline script/style and data/blob assets only.
PREVIEW_CSP = (
    "default-src 'none'; "
    "script-src 'unsafe-inline'; "
    "style-src 'unsafe-inline'; "
    "img-src data: blob:; "
    "font-src data:; "
    "media-src data: blob:"
)

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="Content-Security-Policy" content="{csp}">
  <style>
    html, body {{ height: 100%; margin: 0; padding: 0; overflow: auto; font-family: sans-serif; background-color: {background}; }}
{css}
  </style>
  <title>Live Preview</title>
</head>
<body>
{html}
<script>{javascript}</script>
</body>
</html>
"""


def _escape_closing_tag(fragment: str, tag: str) -> str:
    # "</script" inside a script block would end it early
    return re.sub(rf"</({tag})", r"<\\/\1", fragment, flags=re.IGNORECASE)


def build_preview_document(html: Optional[str], css: Optional[str], javascript: Optional[str], variant: str = DEFAULT_VARIANT) -> str:
    """
    Assemble html, css and javascript into one self-contained document.

    Missing fields render as empty sections. The result depends only on the
    arguments.
    """
    background = get_variant(variant)["background"]
    return DOCUMENT_TEMPLATE.format(
        csp=PREVIEW_CSP,
        background=background,
        css=_escape_closing_tag(css or "", "style"),
        html=html or "",
        javascript=_escape_closing_tag(javascript or "", "script"),
    )


@dataclass(frozen=True)
class PreviewFrame:
    key: int
    document: str
    variant: str

    @property
    def sandbox(self) -> str:
        return sandbox_attribute(self.variant)

    def to_iframe(self) -> str:
        """Iframe markup embedding the document through srcdoc."""
        return (
            f'<iframe id="preview-frame-{self.key}" data-preview-key="{self.key}" '
            f'title="Live Preview" sandbox="{self.sandbox}" '
            f'srcdoc="{html_lib.escape(self.document, quote=True)}"></iframe>'
        )


class PreviewRenderer:
    def __init__(self, variant: str = DEFAULT_VARIANT):
        get_variant(variant)
        if "allow-same-origin" in sandbox_attribute(variant):
            logger.warning(f"Preview variant '{variant}' grants allow-same-origin; generated scripts can reach the host origin")
        self.variant = variant
        self._frame: Optional[PreviewFrame] = None
        self._next_key = 1

    @property
    def current(self) -> Optional[PreviewFrame]:
        return self._frame

    def create(self, code: GeneratedCode) -> PreviewFrame:
        """Build a new frame with a fresh key from the given code."""
        document = build_preview_document(code.html, code.css, code.javascript, self.variant)
        frame = PreviewFrame(key=self._next_key, document=document, variant=self.variant)
        self._next_key += 1
        self._frame = frame
        logger.debug(f"Created preview frame {frame.key}")
        return frame

    def destroy(self) -> None:
        """Tear down the live frame, if any."""
        if self._frame is not None:
            logger.debug(f"Destroyed preview frame {self._frame.key}")
        self._frame = None

    def render(self, code: GeneratedCode) -> PreviewFrame:
        """Replace the live frame: destroy(old) then create(new)."""
        self.destroy()
        return self.create(code)
