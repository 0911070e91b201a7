from .user import AbstractUserDAO, UserDAO
from .message import AbstractMessageDAO, MessageDAO
