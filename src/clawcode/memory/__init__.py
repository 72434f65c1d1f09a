"""Persistent context memory for clawcode."""

from clawcode.memory.memory_manager import MemoryManager, get_project_hash

__all__ = ["MemoryManager", "get_project_hash"]
