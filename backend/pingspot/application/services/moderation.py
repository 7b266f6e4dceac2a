"""Fail-open moderation gate for user-supplied names."""

import logging

from pingspot.application.interfaces import ModerationService
from pingspot.domain.exceptions import ContentRejectedError

logger = logging.getLogger(__name__)


async def moderate_text(moderation: ModerationService, text: str, field: str = "name") -> None:
    """Raise ContentRejectedError when ``text`` is flagged.

    A failing moderation service accepts the text.
    """
    try:
        result = await moderation.check(text)
    except Exception:
        logger.exception("Moderation check failed; accepting %s '%s'", field, text)
        return
    if result.flagged:
        logger.warning("%s flagged by moderation: '%s' (%s)", field.capitalize(), text, result.reason)
        raise ContentRejectedError(field, result.reason)
