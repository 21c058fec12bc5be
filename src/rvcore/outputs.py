"""
Output Types
============

An output type is a concrete representation a sample or a density argument
takes: a floating point width, a fixed-width integer, a boolean outcome, or a
distribution whose parameter is the value itself. Families implement their
characteristics once over *canonical* float64 arrays; output types convert
between their representation and the canonical form at the boundary.

- :class:`OutputType` — the contract every representation implements.
- :class:`FloatOutputType`, :class:`IntegerOutputType`,
  :class:`BoolOutputType`, :class:`DistributionOutputType` — built-ins.
- :class:`OutputTypeRegister` — maps Python/NumPy value types (and families)
  to output types, used to infer the output type of a value.

Notes
-----
- Every output type is either continuous-compatible or discrete-compatible
  (:attr:`OutputType.kind`), never both.
- ``accepts`` and ``to_canonical`` are total: a value the type does not accept
  maps to ``False`` / ``NaN`` instead of raising.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, cast

import numpy as np

from rvcore.distributions.support import ContinuousSupport, DiscreteSupport
from rvcore.errors import CapabilityError
from rvcore.types import BoolArray, FloatArray, Kind

if TYPE_CHECKING:
    import numpy.typing as npt

    from rvcore.distributions.support import Support


def _is_real_scalar(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, (bool, np.bool_)
    )


def _is_integral_scalar(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _pull_inside(
    out: npt.NDArray[Any], support: Support | None, scalar: type[np.floating[Any]]
) -> npt.NDArray[Any]:
    """Move values lying on an open, finite endpoint of ``support`` to the interior."""
    if not isinstance(support, ContinuousSupport) or out.size == 0:
        return out
    # draws and rounding to a narrower width may land on an open endpoint
    if not support.left_closed and math.isfinite(support.left):
        lo = scalar(support.left)
        out = np.where(out == lo, np.nextafter(lo, scalar(math.inf)), out)
    if not support.right_closed and math.isfinite(support.right):
        hi = scalar(support.right)
        out = np.where(out == hi, np.nextafter(hi, scalar(-math.inf)), out)
    return out


class OutputType(ABC):
    """
    Representation of sampled values and density arguments.

    Attributes
    ----------
    name : str
        Human-readable name (e.g., ``"float32"``).
    kind : Kind
        ``Kind.CONTINUOUS`` for continuous-compatible types,
        ``Kind.DISCRETE`` for discrete-compatible ones.
    dtype : numpy.dtype
        Dtype of arrays produced by :meth:`from_canonical`.
    python_types : tuple[type, ...]
        Value types the global register infers this output type from.
    """

    name: str
    kind: Kind

    @property
    @abstractmethod
    def dtype(self) -> np.dtype[Any]: ...

    @property
    def python_types(self) -> tuple[type, ...]:
        return ()

    @abstractmethod
    def _accepts_scalar(self, value: Any) -> bool: ...

    @abstractmethod
    def _canonical_scalar(self, value: Any) -> float: ...

    def _accepts_array(self, arr: npt.NDArray[Any]) -> BoolArray:
        flat = [self._accepts_scalar(v) for v in arr.ravel()]
        return np.array(flat, dtype=bool).reshape(arr.shape)

    def _canonical_array(self, arr: npt.NDArray[Any]) -> FloatArray:
        flat = [self._canonical_scalar(v) for v in arr.ravel()]
        return np.array(flat, dtype=np.float64).reshape(arr.shape)

    def accepts(self, value: Any) -> bool | BoolArray:
        """
        Type-level membership of ``value``.

        Parameters
        ----------
        value : Any
            Scalar, NumPy array, list or tuple.

        Returns
        -------
        bool or BoolArray
            ``bool`` for scalars, an element-wise mask for arrays and
            sequences. Never raises.
        """
        if isinstance(value, np.ndarray):
            if value.dtype == object:
                return OutputType._accepts_array(self, value)
            return self._accepts_array(value)
        if isinstance(value, (list, tuple)):
            return np.array([self.accepts(v) for v in value], dtype=bool)
        return self._accepts_scalar(value)

    def to_canonical(self, value: Any) -> FloatArray:
        """
        Convert ``value`` to the canonical float64 form.

        Elements the type does not accept become ``NaN``, which no support
        contains.

        Returns
        -------
        FloatArray
            0-d array for scalars, an array of the same shape otherwise.
        """
        if isinstance(value, np.ndarray):
            if value.dtype == object:
                return OutputType._canonical_array(self, value)
            return self._canonical_array(value)
        if isinstance(value, (list, tuple)):
            return np.array([self.to_canonical(v) for v in value], dtype=np.float64)
        return np.asarray(self._canonical_scalar(value), dtype=np.float64)

    @abstractmethod
    def from_canonical(
        self, values: FloatArray, support: Support | None = None
    ) -> npt.NDArray[Any]:
        """
        Represent canonical draws in this output type.

        Parameters
        ----------
        values : FloatArray
            One-dimensional canonical values (in the support).
        support : Support, optional
            Support of the distribution for this output type, used to keep
            the converted values inside it.
        """

    @abstractmethod
    def scalar(self, value: Any) -> Any:
        """Single element of a converted array as a value of this type."""

    def represents(self, support: Support | None) -> bool:
        """
        Whether every point of ``support`` has a value of this type.

        Samplers check this before drawing; types of bounded range override
        it.
        """
        return True

    @property
    def is_continuous(self) -> bool:
        return self.kind == Kind.CONTINUOUS

    @property
    def is_discrete(self) -> bool:
        return self.kind == Kind.DISCRETE

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class FloatOutputType(OutputType):
    """
    Floating point output type of a given width.

    Parameters
    ----------
    name : str
        Type name.
    scalar_type : type[numpy.floating]
        NumPy scalar type (``numpy.float64``, ``numpy.float32``, ...).
    aliases : tuple[type, ...]
        Additional value types inferred as this output type.
    """

    name: str
    scalar_type: type[np.floating[Any]]
    aliases: tuple[type, ...] = ()
    kind: Kind = field(default=Kind.CONTINUOUS, init=False)

    @property
    def dtype(self) -> np.dtype[Any]:
        return np.dtype(self.scalar_type)

    @property
    def python_types(self) -> tuple[type, ...]:
        return (self.scalar_type, *self.aliases)

    def _accepts_scalar(self, value: Any) -> bool:
        return _is_real_scalar(value)

    def _accepts_array(self, arr: npt.NDArray[Any]) -> BoolArray:
        return np.full(arr.shape, arr.dtype.kind in "iuf", dtype=bool)

    def _canonical_scalar(self, value: Any) -> float:
        if not _is_real_scalar(value):
            return math.nan
        try:
            with np.errstate(over="ignore"):
                return float(self.scalar_type(value))
        except OverflowError:
            return math.inf if value > 0 else -math.inf

    def _canonical_array(self, arr: npt.NDArray[Any]) -> FloatArray:
        if arr.dtype.kind not in "iuf":
            return np.full(arr.shape, np.nan, dtype=np.float64)
        with np.errstate(over="ignore"):
            return arr.astype(self.dtype).astype(np.float64)

    def from_canonical(
        self, values: FloatArray, support: Support | None = None
    ) -> npt.NDArray[np.floating[Any]]:
        canonical = np.asarray(values, dtype=np.float64)
        with np.errstate(over="ignore"):
            out = canonical.astype(self.dtype)
        # finite draws beyond the width's range stay finite
        overflowed = np.isinf(out) & np.isfinite(canonical)
        if overflowed.any():
            largest = np.finfo(self.dtype).max
            out = np.where(overflowed, np.copysign(largest, canonical), out).astype(self.dtype)
        return _pull_inside(out, support, self.scalar_type)

    def scalar(self, value: Any) -> np.floating[Any]:
        return self.scalar_type(value)

    def __repr__(self) -> str:
        return f"FloatOutputType({self.name})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class IntegerOutputType(OutputType):
    """
    Fixed-width integer output type.

    Only integral values representable in the width are accepted.
    """

    name: str
    scalar_type: type[np.integer[Any]]
    aliases: tuple[type, ...] = ()
    kind: Kind = field(default=Kind.DISCRETE, init=False)

    @property
    def dtype(self) -> np.dtype[Any]:
        return np.dtype(self.scalar_type)

    @property
    def python_types(self) -> tuple[type, ...]:
        return (self.scalar_type, *self.aliases)

    def _accepts_scalar(self, value: Any) -> bool:
        if not _is_integral_scalar(value):
            return False
        info = np.iinfo(self.dtype)
        return info.min <= int(value) <= info.max

    def _accepts_array(self, arr: npt.NDArray[Any]) -> BoolArray:
        if arr.dtype.kind not in "iu":
            return np.zeros(arr.shape, dtype=bool)
        if np.can_cast(arr.dtype, self.dtype, casting="safe"):
            return np.ones(arr.shape, dtype=bool)
        info = np.iinfo(self.dtype)
        as_float = arr.astype(np.float64)
        return cast(BoolArray, (as_float >= float(info.min)) & (as_float <= float(info.max)))

    def _canonical_scalar(self, value: Any) -> float:
        return float(int(value)) if self._accepts_scalar(value) else math.nan

    def _canonical_array(self, arr: npt.NDArray[Any]) -> FloatArray:
        mask = self._accepts_array(arr)
        if arr.dtype.kind not in "iu":
            return np.full(arr.shape, np.nan, dtype=np.float64)
        return np.where(mask, arr.astype(np.float64), np.nan)

    def represents(self, support: Support | None) -> bool:
        """
        Whether the extreme points of a discrete ``support`` fit the width.

        An unbounded side is accepted; draws beyond the width are rejected by
        :meth:`from_canonical` instead.
        """
        if not isinstance(support, DiscreteSupport):
            return True
        info = np.iinfo(self.dtype)
        first, last = support.first(), support.last()
        return (first is None or first >= info.min) and (last is None or last <= info.max)

    def from_canonical(
        self, values: FloatArray, support: Support | None = None
    ) -> npt.NDArray[np.integer[Any]]:
        """
        Round canonical values to the integer width.

        Raises
        ------
        CapabilityError
            If a value is not finite or outside the width's range.
        """
        rounded = np.rint(np.asarray(values, dtype=np.float64))
        info = np.iinfo(self.dtype)
        outside = ~np.isfinite(rounded) | (rounded < info.min) | (rounded > info.max)
        if outside.any():
            bad = rounded[outside][0]
            raise CapabilityError(f"Value {bad} cannot be represented as {self.name}.")
        return rounded.astype(self.dtype)

    def scalar(self, value: Any) -> np.integer[Any]:
        return self.scalar_type(value)

    def __repr__(self) -> str:
        return f"IntegerOutputType({self.name})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class BoolOutputType(OutputType):
    """Two-valued outcome type; ``True`` is canonical ``1.0``."""

    name: str = "bool"
    kind: Kind = field(default=Kind.DISCRETE, init=False)

    @property
    def dtype(self) -> np.dtype[Any]:
        return np.dtype(np.bool_)

    @property
    def python_types(self) -> tuple[type, ...]:
        return (bool, np.bool_)

    def _accepts_scalar(self, value: Any) -> bool:
        return isinstance(value, (bool, np.bool_))

    def _accepts_array(self, arr: npt.NDArray[Any]) -> BoolArray:
        return np.full(arr.shape, arr.dtype.kind == "b", dtype=bool)

    def _canonical_scalar(self, value: Any) -> float:
        if not self._accepts_scalar(value):
            return math.nan
        return 1.0 if value else 0.0

    def _canonical_array(self, arr: npt.NDArray[Any]) -> FloatArray:
        if arr.dtype.kind != "b":
            return np.full(arr.shape, np.nan, dtype=np.float64)
        return arr.astype(np.float64)

    def represents(self, support: Support | None) -> bool:
        if not isinstance(support, DiscreteSupport):
            return True
        first, last = support.first(), support.last()
        return first is not None and last is not None and first >= 0 and last <= 1

    def from_canonical(
        self, values: FloatArray, support: Support | None = None
    ) -> npt.NDArray[np.bool_]:
        return np.asarray(values, dtype=np.float64) != 0.0

    def scalar(self, value: Any) -> bool:
        return bool(value)

    def __repr__(self) -> str:
        return f"BoolOutputType({self.name})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class DistributionOutputType(OutputType):
    """
    A distribution family used as an output type.

    A draw of canonical value ``x`` is represented by the distribution
    ``family(parameter=x, **fixed)``; the canonical form of such a
    distribution is its ``parameter`` in the base parametrization. This is how
    a prior over a parameter samples whole distributions (e.g. a Beta prior
    producing Bernoulli distributions).

    Parameters
    ----------
    family_name : str
        Registered name of the produced family.
    parameter : str
        Base-parametrization field carrying the value.
    fixed : tuple[tuple[str, Any], ...]
        Remaining base parameters, held constant.
    kind : Kind
        Kind of the parameter space (continuous by default).

    Notes
    -----
    Building a distribution validates its parameters: a draw that violates
    the family's constraints raises :class:`~rvcore.errors.DomainError`.
    """

    family_name: str
    parameter: str
    fixed: tuple[tuple[str, Any], ...] = ()
    kind: Kind = Kind.CONTINUOUS
    name: str = field(default="", init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", f"{self.family_name}[{self.parameter}]")

    @property
    def dtype(self) -> np.dtype[Any]:
        return np.dtype(object)

    def _accepts_scalar(self, value: Any) -> bool:
        if getattr(value, "family_name", None) != self.family_name:
            return False
        base = getattr(value, "base_parameters", None)
        if base is None or self.parameter not in base:
            return False
        return all(base.get(key) == val for key, val in self.fixed)

    def _canonical_scalar(self, value: Any) -> float:
        if not self._accepts_scalar(value):
            return math.nan
        return float(value.base_parameters[self.parameter])

    def from_canonical(
        self, values: FloatArray, support: Support | None = None
    ) -> npt.NDArray[np.object_]:
        from rvcore.families.registry import ParametricFamilyRegister

        family = ParametricFamilyRegister.get(self.family_name)
        fixed = dict(self.fixed)
        flat = _pull_inside(np.asarray(values, dtype=np.float64), support, np.float64)
        out = np.empty(flat.shape, dtype=object)
        for i, value in enumerate(flat):
            out[i] = family.distribution(**{self.parameter: float(value)}, **fixed)
        return out

    def scalar(self, value: Any) -> Any:
        return value

    def __repr__(self) -> str:
        return f"DistributionOutputType({self.name})"


Float64 = FloatOutputType("float64", np.float64, aliases=(float,))
Float32 = FloatOutputType("float32", np.float32)

Int8 = IntegerOutputType("int8", np.int8)
Int16 = IntegerOutputType("int16", np.int16)
Int32 = IntegerOutputType("int32", np.int32)
Int64 = IntegerOutputType("int64", np.int64, aliases=(int,))
UInt8 = IntegerOutputType("uint8", np.uint8)
UInt16 = IntegerOutputType("uint16", np.uint16)
UInt32 = IntegerOutputType("uint32", np.uint32)
UInt64 = IntegerOutputType("uint64", np.uint64)

Bool = BoolOutputType()

FLOAT_OUTPUT_TYPES: tuple[FloatOutputType, ...] = (Float64, Float32)
INTEGER_OUTPUT_TYPES: tuple[IntegerOutputType, ...] = (
    Int64,
    Int32,
    Int16,
    Int8,
    UInt64,
    UInt32,
    UInt16,
    UInt8,
)
BUILTIN_OUTPUT_TYPES: tuple[OutputType, ...] = (*FLOAT_OUTPUT_TYPES, *INTEGER_OUTPUT_TYPES, Bool)


class OutputTypeRegister:
    """
    Singleton registry inferring output types from values.

    Scalar value types are looked up along their MRO, NumPy arrays by dtype,
    sequences by their first element and distributions by family name.
    Built-in output types are registered when the singleton is created.
    """

    _instance: ClassVar[OutputTypeRegister | None] = None
    _by_type: dict[type, OutputType]
    _by_family: dict[str, DistributionOutputType]

    def __new__(cls) -> OutputTypeRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._by_type = {}
            instance._by_family = {}
            cls._instance = instance
            for output_type in BUILTIN_OUTPUT_TYPES:
                cls.register(output_type)
        return cls._instance

    @classmethod
    def register(cls, output_type: OutputType) -> None:
        """
        Register an output type for inference.

        Parameters
        ----------
        output_type : OutputType
            Output type to register. Registering the same object twice is a
            no-op.

        Raises
        ------
        ValueError
            If one of its value types (or its family) is already mapped to a
            different output type.
        """
        self = cls()
        if isinstance(output_type, DistributionOutputType):
            current = self._by_family.get(output_type.family_name)
            if current is not None and current is not output_type:
                raise ValueError(
                    f"Family {output_type.family_name} already has output type {current!r}"
                )
            self._by_family[output_type.family_name] = output_type
            return

        for python_type in output_type.python_types:
            current_type = self._by_type.get(python_type)
            if current_type is not None and current_type is not output_type:
                raise ValueError(
                    f"Type {python_type.__name__} already mapped to output type {current_type!r}"
                )
        for python_type in output_type.python_types:
            self._by_type[python_type] = output_type

    @classmethod
    def infer(cls, value: Any) -> OutputType:
        """
        Infer the output type of ``value``.

        Raises
        ------
        CapabilityError
            If no registered output type matches.
        """
        self = cls()

        if isinstance(value, np.ndarray):
            if value.dtype == object:
                if value.size == 0:
                    raise CapabilityError("Cannot infer output type of an empty object array.")
                return cls.infer(value.flat[0])
            found = self._by_type.get(value.dtype.type)
            if found is None:
                raise CapabilityError(f"No output type registered for dtype {value.dtype}.")
            return found

        if isinstance(value, (list, tuple)):
            if not value:
                raise CapabilityError("Cannot infer output type of an empty sequence.")
            return cls.infer(value[0])

        family_name = getattr(value, "family_name", None)
        if family_name is not None:
            found_family = self._by_family.get(family_name)
            if found_family is None:
                raise CapabilityError(f"No output type registered for family {family_name}.")
            return found_family

        for python_type in type(value).__mro__:
            found = self._by_type.get(python_type)
            if found is not None:
                return found
        raise CapabilityError(f"No output type registered for {type(value).__name__}.")

    @classmethod
    def output_types(cls) -> list[OutputType]:
        """All registered output types, in registration order."""
        self = cls()
        seen: dict[int, OutputType] = {}
        for output_type in (*self._by_type.values(), *self._by_family.values()):
            seen.setdefault(id(output_type), output_type)
        return list(seen.values())


@lru_cache(maxsize=1)
def configure_output_types() -> OutputTypeRegister:
    """
    Configure the global output type register with the built-in output types.

    Returns
    -------
    OutputTypeRegister
        The global register of output types.
    """
    return OutputTypeRegister()


def reset_output_types_register() -> None:
    """Drop the singleton; the next access re-registers the built-ins."""
    configure_output_types.cache_clear()
    OutputTypeRegister._instance = None


__all__ = [
    "OutputType",
    "FloatOutputType",
    "IntegerOutputType",
    "BoolOutputType",
    "DistributionOutputType",
    "Float64",
    "Float32",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Bool",
    "FLOAT_OUTPUT_TYPES",
    "INTEGER_OUTPUT_TYPES",
    "BUILTIN_OUTPUT_TYPES",
    "OutputTypeRegister",
    "configure_output_types",
    "reset_output_types_register",
]
