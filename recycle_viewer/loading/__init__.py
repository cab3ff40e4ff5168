from .buffer_loader import BufferLoader

__all__ = ["BufferLoader"]
