from .message import MessageService
