"""metarbot - an asyncio IRC bot for aviation weather reports."""

__version__ = "0.3.0"
