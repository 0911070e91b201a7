from .message import AbstractValidator, SaveMessageRequestValidator, SaveImageRequestValidator
