from .client import HttpClient

__all__ = ["HttpClient"]
