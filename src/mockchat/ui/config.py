"""Labels, formats and limits shared by the TUI widgets, plus LogLevel."""


class LogLevel:
    """Numeric log thresholds; a sink shows events at or above its level."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _by_name = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "warn": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        for name, value in cls._by_name.items():
            if value == level:
                return name.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a level name. Unknown names mean DEBUG."""
        return cls._by_name.get(level_str.strip().lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIME_FORMAT = "%H:%M"
SIDEBAR_PREVIEW_LENGTH = 40  # Characters of the last message shown in the sidebar

# Welcome screen
WELCOME_TITLE = "Welcome to Chat"
WELCOME_SUBTITLE = "Start a new conversation to begin chatting"
NEW_CHAT_LABEL = "+ New Chat"

# Input bar labels
SEND_LABEL = "Send"
SENDING_LABEL = "Sending..."
INPUT_PLACEHOLDER = "Type your message..."
