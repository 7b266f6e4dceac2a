from .openai_moderation_client import OpenAIModerationClient

__all__ = ["OpenAIModerationClient"]
