from .errors import (
    Error,
    ErrorType,
    ErrorOr,
    Deleted,
    DELETED,
    UserErrors,
    MessageErrors,
)
