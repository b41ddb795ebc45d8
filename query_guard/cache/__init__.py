from query_guard.cache.policy import DEFAULT_PUBLIC_QUERIES, CacheDirective, CachePolicySelector

__all__ = ["CacheDirective", "CachePolicySelector", "DEFAULT_PUBLIC_QUERIES"]
