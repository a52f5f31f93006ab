class ChatError(Exception):
    """Base class for failures the API turns into client-facing errors."""

    detail = "Request failed"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.detail)
        self.detail = detail or self.detail


class AuthenticationRequired(ChatError):
    detail = "Please log in to continue"


class PermissionDenied(ChatError):
    detail = "You do not have access to this resource"


class RecordNotFound(ChatError):
    detail = "Not found"


class ProfileNotFound(RecordNotFound):
    detail = "Profile not found"


class CoachNotFound(RecordNotFound):
    detail = "Coach not found"


class ConversationNotFound(RecordNotFound):
    detail = "Conversation not found"


class NotAParticipant(PermissionDenied):
    detail = "You are not part of this conversation"


class EmptyMessage(ChatError):
    detail = "Message cannot be empty"


class Conflict(ChatError):
    detail = "Already exists"
