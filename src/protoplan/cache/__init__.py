"""Stable keys for caching generation actions."""

from .keys import ActionCacheInput, action_key, invocation_cache_input, plan_action_keys

__all__ = ["ActionCacheInput", "action_key", "invocation_cache_input", "plan_action_keys"]
