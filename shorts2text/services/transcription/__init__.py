"""
Transcription module - remote service client abstraction layer.

Factory function for creating a service client from settings.
"""

from .base import BaseTranscriptionService

__all__ = ["BaseTranscriptionService", "create_transcription_service"]


def create_transcription_service(provider: str = "http", **kwargs) -> BaseTranscriptionService:
    """Factory function to create a transcription service client.

    Args:
        provider: Service client name ("http")
        **kwargs: Provider-specific configuration

    Returns:
        BaseTranscriptionService implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "http":
        from .http_client import HttpTranscriptionService

        return HttpTranscriptionService(**kwargs)
    else:
        raise ValueError(f"Unknown transcription provider: {provider}")
