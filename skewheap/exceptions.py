class HeapError(Exception):
    pass


class EmptyHeapError(HeapError, IndexError):
    def __init__(self, message="empty heap"):
        HeapError.__init__(self, message)
