from .options import ClientOptions

__all__ = ["ClientOptions"]
