"""Flask front end for the bookstore catalog (HTML page + JSON API)."""
from .web import app, main

__all__ = ["app", "main"]
