"""Herald: event-driven notification dispatcher.

Decodes one inbound infrastructure event per invocation (image scan
results, export status, identity provider events, disk space alarms,
maintenance job results), enriches it where needed, derives the chat,
email, queue and topic messages its rules call for, and sends them.
"""

__version__ = "0.1.0"
__description__ = "Event-driven notification dispatcher for infrastructure events"

from herald.core.processor import NotificationProcessor
from herald.handler import lambda_handler
from herald.cli.app import app as cli

__all__ = ["NotificationProcessor", "lambda_handler", "cli", "__version__"]
