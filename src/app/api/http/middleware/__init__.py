from .method_override import MethodOverrideMiddleware

__all__ = ["MethodOverrideMiddleware"]
