from .exceptions import (
    BaseAppError,
    InfrastructureError,
    NetworkError,
    APIError,
    SenderNotResolvedError,
)
