from .scanner import ContainerScanner, find_next_end_marker

__all__ = ["ContainerScanner", "find_next_end_marker"]
