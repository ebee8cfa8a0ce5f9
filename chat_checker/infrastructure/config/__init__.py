from .settings import (
    Settings,
    TwoChatSettings,
    SearchSettings,
    ServerSettings,
    get_settings,
)

__all__ = ["Settings", "TwoChatSettings", "SearchSettings", "ServerSettings", "get_settings"]
