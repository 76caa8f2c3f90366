"""Map the four fold style names to Rich styles.

Invalid style strings fall back to the schema default for that slot.
"""

import logging

from rich.errors import StyleSyntaxError
from rich.style import Style

from thread_fold.app.settings_store import SCHEMA, FoldSettings
from thread_fold.core.regions import FoldStyle

logger = logging.getLogger(__name__)

CURSOR_STYLE = Style(reverse=True)
UNREAD_STYLE = Style(bold=True)


def _parse(definition: str, slot: FoldStyle) -> Style:
    try:
        return Style.parse(definition)
    except StyleSyntaxError:
        logger.warning("invalid style %r for %s, using default", definition, slot.value)
        return Style.parse(str(SCHEMA[f"style:{slot.value}"]))


def build_styles(settings: FoldSettings) -> dict[FoldStyle, Style]:
    return {slot: _parse(settings.style_for(slot), slot) for slot in FoldStyle}
