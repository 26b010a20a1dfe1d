from . import network, notify, urls

__all__ = ["network", "notify", "urls"]
