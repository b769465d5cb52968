__version__ = "1.0.0"

from .core.api import (
    APIError,
    Client,
    ConfigurationError,
    NotFoundError,
    OpenAIError,
    TransportError,
    TransportTimeoutError,
)
from .core.session import ChatSession
