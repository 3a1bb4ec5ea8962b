# smartspend/handlers/errors.py
# Last line of defence: store/network failures end up here.
from __future__ import annotations

import logging

from aiogram import Router
from aiogram.types import ErrorEvent

from smartspend.ui.messages import GENERIC_FAILURE

log = logging.getLogger(__name__)
router = Router(name=__name__)


@router.errors()
async def on_error(event: ErrorEvent) -> bool:
    log.error("update_failed err=%r", event.exception, exc_info=event.exception)
    message = event.update.message
    if message is not None:
        try:
            await message.answer(GENERIC_FAILURE)
        except Exception as e:
            log.debug("error reply suppressed: %s", e)
    return True
