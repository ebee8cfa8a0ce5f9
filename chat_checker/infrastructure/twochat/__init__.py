from .source import ChatSource, TwoChatError
from .client import TwoChatClient

__all__ = ["ChatSource", "TwoChatError", "TwoChatClient"]
