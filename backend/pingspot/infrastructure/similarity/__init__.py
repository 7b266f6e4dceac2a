from .openrouter_similarity_resolver import OpenRouterSimilarityResolver

__all__ = ["OpenRouterSimilarityResolver"]
