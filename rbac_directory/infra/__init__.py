from .draft_cache import InMemoryDraftCache

__all__ = ["InMemoryDraftCache"]
