from .api import KeyValueStore, make_store

__all__ = ["KeyValueStore", "make_store"]
