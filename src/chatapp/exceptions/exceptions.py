class BaseAppError(Exception):
    pass

class InfrastructureError(BaseAppError):
    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)

# Network errors
class NetworkError(InfrastructureError):
    pass

# HTTP API errors (image storage provider)
class APIError(BaseAppError):
    def __init__(self, message: str, status_code: int | None = None,
                 response_data: dict | None = None):
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code is not None and 500 <= self.status_code < 600

class SenderNotResolvedError(BaseAppError):
    """
    Raised when a message's owner cannot be resolved while building a response
    (the user was removed after the message was written or after the existence check)
    """
    def __init__(self, user_id: str, message_id: str | None = None):
        self.user_id = user_id
        self.message_id = message_id
        super().__init__(f"Sender {user_id} of message {message_id} could not be resolved")
