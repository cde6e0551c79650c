"""
Fixed-point tensor module.

This module provides a small N-dimensional array over FixedPoint values,
backed by an owned numpy object array. numpy dispatches every element
operation to FixedPoint, so matmul, transpose and reductions stay in
fixed point. Every operation that produces a tensor returns a new
instance with its own buffer.
"""

from math import prod
from typing import Callable, Iterable, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import DimensionMismatchError, PrecisionMismatchError, ShapeError
from .fixed_point import FixedFormat, FixedPoint, Q16_16


def _object_scalar(value: FixedPoint) -> np.ndarray:
    # 0D object array so numpy never tries to coerce the value
    scalar = np.empty((), dtype=object)
    scalar[()] = value
    return scalar


class Tensor:
    """
    N-dimensional array of FixedPoint values.

    Parameters:
    -----------
    shape : sequence of int
        Dimension sizes
    data : iterable of FixedPoint
        Flat buffer in row-major order; its length must equal the
        product of the shape
    fmt : FixedFormat, optional
        Numeric format tag; inferred from the data when omitted
    """

    __slots__ = ("_array", "_fmt")

    def __init__(self,
                 shape: Sequence[int],
                 data: Iterable[FixedPoint],
                 fmt: Optional[FixedFormat] = None):
        shape = tuple(int(s) for s in shape)
        if any(s < 0 for s in shape):
            raise ShapeError(f"Negative dimension in shape {shape}")
        data = list(data)
        if len(data) != prod(shape):
            raise ShapeError(
                f"Buffer length {len(data)} does not match shape {shape}"
            )

        if fmt is None:
            fmt = data[0].fmt if data else Q16_16
        for value in data:
            if not isinstance(value, FixedPoint) or value.fmt != fmt:
                raise PrecisionMismatchError(
                    f"Tensor of {fmt} cannot hold {value!r}"
                )

        buffer = np.empty(len(data), dtype=object)
        buffer[:] = data
        self._array = buffer.reshape(shape)
        self._fmt = fmt

    @classmethod
    def _wrap(cls, array, fmt: FixedFormat) -> "Tensor":
        """Adopt a copy of an object array produced by a tensor operation."""
        tensor = cls.__new__(cls)
        if not isinstance(array, np.ndarray):
            array = _object_scalar(array)
        tensor._array = array.copy()
        tensor._fmt = fmt
        return tensor

    # Constructors

    @classmethod
    def zeros(cls, shape: Sequence[int], fmt: FixedFormat = Q16_16) -> "Tensor":
        zero = FixedPoint.zero(fmt)
        return cls(shape, [zero] * prod(shape), fmt)

    @classmethod
    def from_unscaled(cls,
                      shape: Sequence[int],
                      values: Iterable[int],
                      fmt: FixedFormat = Q16_16) -> "Tensor":
        """Build from plain integers."""
        data = [FixedPoint.new_unscaled(abs(int(v)), v < 0, fmt) for v in values]
        return cls(shape, data, fmt)

    @classmethod
    def from_numpy(cls, array: np.ndarray, fmt: FixedFormat = Q16_16) -> "Tensor":
        """
        Convert a float array at the system boundary.

        Parameters:
        -----------
        array : np.ndarray
            Array of finite numbers
        fmt : FixedFormat
            Target format

        Returns:
        --------
        Tensor
            Fixed-point tensor with the array's shape
        """
        array = np.asarray(array, dtype=float)
        if not np.all(np.isfinite(array)):
            raise ValueError("Cannot convert non-finite values to fixed point")
        data = [FixedPoint.from_float(float(v), fmt) for v in array.ravel(order="C")]
        return cls(array.shape, data, fmt)

    # Introspection

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._array.shape

    @property
    def ndim(self) -> int:
        return self._array.ndim

    @property
    def size(self) -> int:
        return self._array.size

    @property
    def fmt(self) -> FixedFormat:
        return self._fmt

    @property
    def data(self) -> Tuple[FixedPoint, ...]:
        return tuple(self._array.ravel())

    def at(self, index: int) -> FixedPoint:
        """Read one element by flat index."""
        if not 0 <= index < self.size:
            raise IndexError(f"Flat index {index} out of range for size {self.size}")
        return self._array.flat[index]

    def __getitem__(self, index) -> FixedPoint:
        if not isinstance(index, tuple):
            index = (index,)
        if len(index) != self.ndim:
            raise ShapeError(
                f"Index of length {len(index)} for a {self.ndim}D tensor"
            )
        for i, size in zip(index, self.shape):
            if not 0 <= i < size:
                raise IndexError(f"Index {index} out of range for shape {self.shape}")
        return self._array[index]

    def __len__(self) -> int:
        if not self.shape:
            raise TypeError("len() of a 0D tensor")
        return self.shape[0]

    # Shape manipulation

    def reshape(self, shape: Sequence[int]) -> "Tensor":
        shape = tuple(shape)
        if prod(shape) != self.size:
            raise ShapeError(f"Cannot reshape {self.shape} into {shape}")
        return Tensor._wrap(self._array.reshape(shape), self._fmt)

    def take_rows(self, start: int, stop: int) -> "Tensor":
        """Copy of rows start..stop (exclusive) along the first axis."""
        if self.ndim == 0:
            raise ShapeError("Cannot take rows of a 0D tensor")
        if not 0 <= start <= stop <= self.shape[0]:
            raise IndexError(f"Rows {start}:{stop} out of range for shape {self.shape}")
        return Tensor._wrap(self._array[start:stop], self._fmt)

    def transpose(self, axes: Optional[Sequence[int]] = None) -> "Tensor":
        """
        Permute axes.

        Parameters:
        -----------
        axes : sequence of int, optional
            Permutation of range(ndim); reverses the axes when omitted

        Returns:
        --------
        Tensor
            Tensor whose axis k is this tensor's axis axes[k]
        """
        if axes is None:
            axes = tuple(reversed(range(self.ndim)))
        axes = tuple(axes)
        if sorted(axes) != list(range(self.ndim)):
            raise ShapeError(f"Invalid axis permutation {axes} for {self.ndim}D tensor")
        return Tensor._wrap(self._array.transpose(axes), self._fmt)

    @property
    def T(self) -> "Tensor":
        return self.transpose()

    # Arithmetic

    def _check_format(self, other: "Tensor") -> None:
        if self._fmt != other._fmt:
            raise PrecisionMismatchError(f"Cannot combine {self._fmt} with {other._fmt}")

    def matmul(self, other: "Tensor") -> "Tensor":
        """Matrix product of two 2D tensors."""
        if self.ndim != 2 or other.ndim != 2:
            raise ShapeError("matmul requires 2D tensors")
        self._check_format(other)
        m, k = self.shape
        k2, n = other.shape
        if k != k2:
            raise DimensionMismatchError(
                f"Inner dimensions differ: {self.shape} @ {other.shape}"
            )
        if k == 0:
            return Tensor.zeros((m, n), self._fmt)
        return Tensor._wrap(np.matmul(self._array, other._array), self._fmt)

    def __matmul__(self, other: "Tensor") -> "Tensor":
        return self.matmul(other)

    def __sub__(self, other: "Tensor") -> "Tensor":
        """Elementwise difference with numpy broadcasting."""
        self._check_format(other)
        try:
            result = np.subtract(self._array, other._array)
        except ValueError as e:
            raise DimensionMismatchError(
                f"Cannot broadcast {self.shape} with {other.shape}"
            ) from e
        return Tensor._wrap(result, self._fmt)

    def __truediv__(self, divisor: FixedPoint) -> "Tensor":
        """Divide every element by a scalar."""
        if divisor.fmt != self._fmt:
            raise PrecisionMismatchError(f"Cannot divide {self._fmt} by {divisor.fmt}")
        return Tensor._wrap(self._array / _object_scalar(divisor), self._fmt)

    def sum(self, axis: int = 0, keepdims: bool = False) -> "Tensor":
        """
        Sum-reduce along one axis.

        Parameters:
        -----------
        axis : int
            Axis to reduce
        keepdims : bool
            Keep the reduced axis with size 1 instead of dropping it

        Returns:
        --------
        Tensor
            Reduced tensor
        """
        if not 0 <= axis < self.ndim:
            raise ShapeError(f"Axis {axis} out of range for {self.ndim}D tensor")

        if self.shape[axis] == 0:
            shape = list(self.shape)
            if keepdims:
                shape[axis] = 1
            else:
                del shape[axis]
            return Tensor.zeros(shape, self._fmt)
        return Tensor._wrap(self._array.sum(axis=axis, keepdims=keepdims), self._fmt)

    def map(self, func: Callable[[FixedPoint], FixedPoint]) -> "Tensor":
        """Apply func elementwise."""
        return Tensor(self.shape, [func(v) for v in self._array.ravel()], self._fmt)

    # Conversion

    def to_numpy(self) -> np.ndarray:
        """Float copy for reporting."""
        return self._array.astype(float)

    def raw_values(self) -> Tuple[int, ...]:
        return tuple(v.raw for v in self._array.ravel())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return (self.shape == other.shape
                and self._fmt == other._fmt
                and self.data == other.data)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape}, fmt={self._fmt})"
