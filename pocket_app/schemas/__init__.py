from .payloads import NotifyRequest, SaveURLRequest

__all__ = ["NotifyRequest", "SaveURLRequest"]
