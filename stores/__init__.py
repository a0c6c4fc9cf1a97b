"""Stores Module - profile and job lookups used by the matching service."""
from stores.base import ProfileStore, JobStore
from stores.memory import InMemoryProfileStore, InMemoryJobStore, load_seed_data

__all__ = [
    'ProfileStore', 'JobStore',
    'InMemoryProfileStore', 'InMemoryJobStore', 'load_seed_data'
]
