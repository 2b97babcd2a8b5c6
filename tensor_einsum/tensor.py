from numbers import Number

import numpy as np


def _product(values):
    result = 1
    for value in values:
        result *= value
    return result


def rowMajorStrides(shape):
    """Element step of every dimension, the last dimension varying fastest."""
    strides = [1] * len(shape)
    for k in range(len(shape) - 2, -1, -1):
        strides[k] = strides[k + 1] * shape[k + 1]
    return tuple(strides)


class Tensor:
    """Dense row-major tensor of float64 values, read-only once built."""

    __slots__ = ("_shape", "_data", "_strides")

    def __init__(self, shape, data):
        """Build a tensor from a shape and flat row-major data.

        Args:
            shape (sequence of int): Extent of every dimension, may be empty
            data (iterable of float): Flat values, last dimension fastest

        Raises:
            ValueError: If an extent is negative or the data length
                disagrees with the product of the shape
        """
        shape = tuple(int(dim) for dim in shape)
        if any(dim < 0 for dim in shape):
            raise ValueError(f"Negative extent in shape {shape}")
        flat = np.array(data, dtype=np.float64).reshape(-1)
        if flat.size != _product(shape):
            raise ValueError(
                f"Data length {flat.size} does not match shape {shape} "
                f"({_product(shape)} elements)"
            )
        flat.setflags(write=False)
        self._shape = shape
        self._data = flat
        self._strides = rowMajorStrides(shape)

    @classmethod
    def zeros(cls, shape):
        shape = tuple(shape)
        return cls(shape, np.zeros(_product(shape)))

    @classmethod
    def scalar(cls, value):
        return cls((), [value])

    @classmethod
    def fromArray(cls, array):
        array = np.asarray(array, dtype=np.float64)
        return cls(array.shape, array.reshape(-1))

    @classmethod
    def fromNested(cls, nested):
        """Build a tensor from nested lists of numbers.

        Every level must be rectangular; a bare number gives a rank-0 tensor.

        Args:
            nested: Number or (possibly nested) list/tuple of numbers

        Returns:
            Tensor: Tensor whose shape follows the nesting

        Raises:
            ValueError: If sibling lists have different lengths or depths

        Example:
            >>> Tensor.fromNested([[1, 2], [3, 4]]).shape
            (2, 2)
        """
        shape = []
        level = nested
        while isinstance(level, (list, tuple)):
            shape.append(len(level))
            if not level:
                break
            level = level[0]
        flat = []
        cls._flatten(nested, shape, 0, (), flat)
        return cls(shape, flat)

    @classmethod
    def _flatten(cls, node, shape, depth, path, out):
        if depth == len(shape):
            if isinstance(node, (list, tuple)):
                raise ValueError(f"Ragged nesting at {list(path)}: expected a number")
            try:
                out.append(float(node))
            except TypeError as exc:
                raise ValueError(f"Non-numeric value at {list(path)}: {node!r}") from exc
            return
        if not isinstance(node, (list, tuple)) or len(node) != shape[depth]:
            raise ValueError(
                f"Ragged nesting at {list(path)}: expected length {shape[depth]}"
            )
        for i, child in enumerate(node):
            cls._flatten(child, shape, depth + 1, path + (i,), out)

    @property
    def shape(self):
        return self._shape

    @property
    def data(self):
        return self._data

    @property
    def strides(self):
        return self._strides

    @property
    def rank(self):
        return len(self._shape)

    @property
    def size(self):
        return self._data.size

    def flatIndex(self, indices):
        """Map an index tuple to its row-major offset in ``data``.

        Raises:
            IndexError: If the index count differs from the rank or an index
                is out of range for its dimension
        """
        indices = tuple(indices)
        if len(indices) != self.rank:
            raise IndexError(f"Expected {self.rank} indices, got {len(indices)}")
        offset = 0
        for dim, (index, extent) in enumerate(zip(indices, self._shape)):
            if not 0 <= index < extent:
                raise IndexError(f"Index {index} out of range for dim {dim} (size {extent})")
            offset += index * self._strides[dim]
        return offset

    def multiIndex(self, flat):
        if not 0 <= flat < self.size:
            raise IndexError(f"Flat index {flat} out of range for size {self.size}")
        indices = [0] * self.rank
        remaining = flat
        for dim in range(self.rank - 1, -1, -1):
            remaining, indices[dim] = divmod(remaining, self._shape[dim])
        return tuple(indices)

    def get(self, indices):
        return float(self._data[self.flatIndex(indices)])

    def nonzero(self, tolerance=1e-9):
        """Yield ``(indices, value)`` for elements whose magnitude exceeds tolerance."""
        for flat, value in enumerate(self._data.tolist()):
            if abs(value) > tolerance:
                yield self.multiIndex(flat), value

    def toArray(self):
        return self._data.reshape(self._shape).copy()

    def tolist(self):
        return self._data.reshape(self._shape).tolist()

    def __eq__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and np.array_equal(self._data, other._data)

    __hash__ = None

    def __repr__(self):
        return f"Tensor(shape={self._shape}, data={self._data.tolist()})"


def asTensor(obj):
    """Coerce a Tensor, numpy array, nested list or number into a Tensor."""
    if isinstance(obj, Tensor):
        return obj
    if isinstance(obj, np.ndarray):
        return Tensor.fromArray(obj)
    if isinstance(obj, (list, tuple)):
        return Tensor.fromNested(obj)
    if isinstance(obj, (Number, np.number)):
        return Tensor.scalar(obj)
    raise TypeError(f"Cannot build a Tensor from {type(obj).__name__}")
