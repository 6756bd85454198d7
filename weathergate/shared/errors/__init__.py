from .base import (
    AppError,
    DomainError,
    ExternalProviderError,
    InfrastructureError,
    StorageIOError,
    TokenGenerationError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "ExternalProviderError",
    "InfrastructureError",
    "StorageIOError",
    "TokenGenerationError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
