"""Exceptions raised by the chat core."""


class MockChatError(Exception):
    """Base class for chat core errors."""


class ResponseError(MockChatError):
    """A response provider failed to produce a reply.

    Attributes:
        conversation_id: Conversation the reply was meant for
    """

    def __init__(self, conversation_id: str, message: str) -> None:
        super().__init__(message)
        self.conversation_id = conversation_id
