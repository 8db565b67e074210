"""Flask JSON API and a small HTML page on top of lexmatch.Engine."""
from .web import app, main

__all__ = ["app", "main"]
