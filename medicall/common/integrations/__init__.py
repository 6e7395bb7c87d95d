# medicall/common/integrations/__init__.py
"""Clients for the outbound voice-call and voice-cloning providers."""

from .bland_ai import BlandAIClient, bland_ai_client
from .elevenlabs import ElevenLabsClient, elevenlabs_client

__all__ = ["BlandAIClient", "bland_ai_client", "ElevenLabsClient", "elevenlabs_client"]
