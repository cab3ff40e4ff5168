from .bounded_decoder import BoundedDecoder, compute_sample_size, scaled_size

__all__ = ["BoundedDecoder", "compute_sample_size", "scaled_size"]
