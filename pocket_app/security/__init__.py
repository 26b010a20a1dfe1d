from .auth import AuthGate, require_shared_secret

__all__ = ["AuthGate", "require_shared_secret"]
