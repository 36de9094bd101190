import copy as _copy
import operator

from .exceptions import HeapError, EmptyHeapError


class SkewHeap:
    """
    A mergeable priority queue kept as a skew heap.

    The ordering predicate defaults to operator.lt, so the largest
    element is at the top.

    >>> heap = SkewHeap([5, 3, 8, 1, 9])
    >>> heap.top()
    9
    >>> [heap.pop() for _ in range(len(heap))]
    [9, 8, 5, 3, 1]

    Looking at or removing the top of an empty heap is an error.

    >>> heap.top()
    Traceback (most recent call last):
        ...
    skewheap.exceptions.EmptyHeapError: empty heap

    Any "less than" style predicate can be given. Reversing the
    comparison gives a min-heap.

    >>> heap = SkewHeap([5, 3, 8], less=operator.gt)
    >>> heap.top()
    3

    Merging moves every element of the other heap into this one and
    leaves the other heap empty.

    >>> a = SkewHeap([4])
    >>> b = SkewHeap([7])
    >>> a.merge(b)
    <SkewHeap size=2>
    >>> a.top(), len(b)
    (7, 0)
    """

    __slots__ = "_root", "_size", "_less"

    def __init__(self, iterable=(), less=None):
        if isinstance(iterable, SkewHeap):
            if less is not None and less is not iterable._less:
                raise HeapError("cannot copy a heap under a different ordering")
            self._less = iterable._less
            self._root = _clone(iterable._root)
            self._size = iterable._size
            return

        self._less = operator.lt if less is None else less
        self._root = None
        self._size = 0

        for value in iterable:
            self.push(value)

    def top(self):
        if not self._size:
            raise EmptyHeapError()
        return self._root.value

    def push(self, value):
        self._root = _merge(self._root, _Node(value), self._less)
        self._size += 1

    def pop(self):
        """
        Remove the top element and return it.

        The subtrees of the old root are merged into the new tree. If the
        ordering predicate raises, the heap is left as it was.
        """

        if not self._size:
            raise EmptyHeapError()

        node = self._root
        self._root = _merge(node.left, node.right, self._less)
        self._size -= 1

        node.left = node.right = None
        return node.value

    def merge(self, other):
        """
        Move all elements of other into this heap and return this heap.

        The other heap is empty afterwards. Its nodes are relinked, not
        copied. Both heaps must share the same predicate. If the
        predicate raises, neither heap changes.

        >>> a = SkewHeap([1, 2])
        >>> a.merge(SkewHeap()).top(), len(a)
        (2, 2)

        >>> a.merge(a)
        Traceback (most recent call last):
            ...
        skewheap.exceptions.HeapError: cannot merge a heap into itself
        """

        if not isinstance(other, SkewHeap):
            raise TypeError("expected a SkewHeap, got {0!r}".format(other))
        if other is self:
            raise HeapError("cannot merge a heap into itself")
        if other._less is not self._less:
            raise HeapError("cannot merge heaps with different orderings")

        root = _merge(self._root, other._root, self._less)
        self._root = root
        self._size += other._size

        other._root = None
        other._size = 0
        return self

    def __iadd__(self, other):
        if not isinstance(other, SkewHeap):
            return NotImplemented
        return self.merge(other)

    def size(self):
        return self._size

    def empty(self):
        return self._size == 0

    def __len__(self):
        return self._size

    def __bool__(self):
        return self._size != 0

    def copy(self):
        return SkewHeap(self)

    __copy__ = copy

    def __deepcopy__(self, memo):
        clone = SkewHeap(less=self._less)
        memo[id(self)] = clone

        clone._root = _clone(self._root, lambda value: _copy.deepcopy(value, memo))
        clone._size = self._size
        return clone

    def assign(self, other):
        """
        Replace the contents of this heap with a copy of other.

        The old tree is released and the predicate of other is adopted.
        Assigning a heap to itself does nothing.

        >>> a = SkewHeap([1, 2, 3])
        >>> b = SkewHeap([10])
        >>> b.assign(a).top(), len(b), len(a)
        (3, 3, 3)
        """

        if not isinstance(other, SkewHeap):
            raise TypeError("expected a SkewHeap, got {0!r}".format(other))
        if other is self:
            return self

        old_root, old_size = self._root, self._size

        self._root = _clone(other._root)
        self._size = other._size
        self._less = other._less

        _release_all(old_root, old_size)
        return self

    def clear(self):
        root, size = self._root, self._size
        self._root = None
        self._size = 0
        _release_all(root, size)

    def __repr__(self):
        return "<{0} size={1}>".format(type(self).__name__, self._size)


class _Node:
    __slots__ = "value", "left", "right"

    def __init__(self, value, left=None, right=None):
        self.value = value
        self.left = left
        self.right = right


def _merge(a, b, less):
    # Walk down the right spines first and make every comparison, then
    # relink on the way back up. A raising predicate leaves both trees
    # untouched.
    spine = []
    while a is not None and b is not None:
        if less(a.value, b.value):
            a, b = b, a
        spine.append(a)
        a = a.right

    rest = b if a is None else a
    for node in reversed(spine):
        node.left, node.right = rest, node.left
        rest = node
    return rest


def _identity(value):
    return value


def _clone(node, copy_value=_identity):
    if node is None:
        return None

    root = _Node(copy_value(node.value))
    stack = [(node, root)]
    while stack:
        source, target = stack.pop()

        if source.left is not None:
            target.left = _Node(copy_value(source.left.value))
            stack.append((source.left, target.left))

        if source.right is not None:
            target.right = _Node(copy_value(source.right.value))
            stack.append((source.right, target.right))
    return root


def _release(node):
    """
    Tear a tree down bottom-up and return the number of released nodes.

    Children are unlinked before their parent is dropped.
    """

    count = 0
    stack = [] if node is None else [node]

    while stack:
        node = stack[-1]

        if node.left is not None:
            child, node.left = node.left, None
        elif node.right is not None:
            child, node.right = node.right, None
        else:
            stack.pop()
            node.value = None
            count += 1
            continue

        stack.append(child)
    return count


def _release_all(root, size):
    released = _release(root)
    if released != size:
        raise HeapError("released {0} nodes, expected {1}".format(released, size))
