"""Small helpers shared by the infrastructure and HTTP layers."""

__all__ = [
    "asyncio_utils",
    "fs",
]
