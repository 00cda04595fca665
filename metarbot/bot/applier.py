"""Turns a command Response into one outbound IRC action."""

from __future__ import annotations

import logging

from ..errors.handling import log_error
from .protocols import ChatConnection
from .response import Ignore, Join, Notice, Part, Privmsg, Quit, Response


async def apply_response(connection: ChatConnection, response: Response) -> bool:
    """Send the action requested by ``response``.

    Connection failures are logged and swallowed.

    Returns:
        True if an action was sent, False for Ignore or on failure.
    """
    if isinstance(response, Ignore):
        return False
    try:
        if isinstance(response, Quit):
            await connection.quit(response.message)
        elif isinstance(response, Part):
            await connection.part(response.channel, response.message)
        elif isinstance(response, Join):
            await connection.join(response.channel)
        elif isinstance(response, Privmsg):
            await connection.send_privmsg(response.target, response.text)
        elif isinstance(response, Notice):
            await connection.send_notice(response.target, response.text)
        else:
            logging.error(f"❌ Unknown response type {type(response).__name__}")
            return False
    except Exception as e:  # noqa: BLE001
        log_error("Error handling response", e, context={"response": response})
        return False
    logging.debug(f"Applied {response}")
    return True
