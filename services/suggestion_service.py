"""
Prompt suggestions for SiteCraft
"""
import asyncio
import logging
from typing import List, Optional, Sequence

from config.prompt_examples import PROMPT_EXAMPLES
from config.settings import SUGGESTION_BLUR_GRACE, SUGGESTION_LIMIT

logger = logging.getLogger(__name__)


def filter_suggestions(query: str, catalog: Sequence[str] = PROMPT_EXAMPLES, limit: int = SUGGESTION_LIMIT) -> List[str]:
    """
    First `limit` catalog entries containing `query`, case-insensitively,
    in catalog order. An empty query matches nothing.
    """
    if not query:
        return []
    needle = query.lower()
    return [example for example in catalog if needle in example.lower()][:limit]


class SuggestionDropdown:
    """
    Visibility policy for the suggestion list under the prompt field.

    Shown while the field has focus and a non-empty value. On blur the list
    stays open for a short grace period so a click on a suggestion still
    lands; selecting a suggestion closes it at once.
    """

    def __init__(self, catalog: Sequence[str] = PROMPT_EXAMPLES, grace: float = SUGGESTION_BLUR_GRACE):
        self.catalog = catalog
        self.grace = grace
        self.value = ""
        self._open = False
        self._pending_hide: Optional[asyncio.TimerHandle] = None

    @property
    def suggestions(self) -> List[str]:
        return filter_suggestions(self.value, self.catalog)

    @property
    def visible(self) -> bool:
        return self._open and bool(self.suggestions)

    def update(self, value: str) -> None:
        self.value = value
        self._open = len(value) > 0

    def focus(self) -> None:
        self._cancel_pending_hide()
        if self.value:
            self._open = True

    def blur(self) -> None:
        self._cancel_pending_hide()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._open = False
            return
        self._pending_hide = loop.call_later(self.grace, self._hide)

    def select(self, suggestion: str) -> str:
        self._cancel_pending_hide()
        self.value = suggestion
        self._open = False
        return suggestion

    def _hide(self) -> None:
        self._pending_hide = None
        self._open = False

    def _cancel_pending_hide(self) -> None:
        if self._pending_hide is not None:
            self._pending_hide.cancel()
            self._pending_hide = None
