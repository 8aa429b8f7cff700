"""Progress notifications forwarded to the MCP client."""

from typing import Awaitable, Callable, Optional

from loguru import logger

# (level, message) -> None; levels follow MCP logging ("info", "warning", "error")
Notifier = Callable[[str, str], Awaitable[None]]


async def emit(notify: Optional[Notifier], level: str, message: str) -> None:
    """Log a progress message and forward it to the client when a notifier is set."""
    logger.log(level.upper(), message)
    if notify is not None:
        await notify(level, message)
