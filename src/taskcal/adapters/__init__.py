"""Adapters - I/O implementations of ports."""

from .file_tasks import JsonTaskStore
from .supabase_rest import SupabaseTaskAdapter

__all__ = [
    "JsonTaskStore",
    "SupabaseTaskAdapter",
]
