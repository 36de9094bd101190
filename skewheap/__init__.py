from .heap import SkewHeap
from .exceptions import HeapError, EmptyHeapError

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "SkewHeap",
    "HeapError",
    "EmptyHeapError"
]
