"""Storage tiers for the ruleset configuration."""

from .areas import JsonFileArea, KeyValueArea, MemoryArea
from .dual import LOCAL, SESSION, DualTierStore

__all__ = ["DualTierStore", "JsonFileArea", "KeyValueArea", "LOCAL", "MemoryArea", "SESSION"]
