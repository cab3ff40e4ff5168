from .image_cache import PagedImageCache
from .pager import ImagePager
from .renderers import FitCenterRenderer

__all__ = ["PagedImageCache", "ImagePager", "FitCenterRenderer"]
