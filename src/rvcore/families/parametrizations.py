"""
Parametrizations
================

A parametrization is one way of writing down the parameters of a family
(``shape`` vs ``meanConcentration`` for Beta, ``meanStd`` vs ``meanPrec`` for
Normal). Each is a frozen dataclass registered on its family with
:func:`parametrization`, carrying predicates marked with :func:`constraint`.

Notes
-----
- NumPy scalar parameters (draws of a prior, for instance) are stored as the
  equivalent Python numbers, so equal parameters compare and hash equal
  whatever width they were sampled in.
- Constraints are inherited: a parametrization subclassing another one is
  checked against the constraints of both.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

import numpy as np

from rvcore.errors import DomainError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from rvcore.families.parametric_family import ParametricFamily
    from rvcore.types import ParametrizationName


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Named predicate over the parameters of a parametrization.

    Parameters
    ----------
    description : str
        The condition, as shown in :class:`~rvcore.errors.DomainError`
        messages (e.g. ``"alpha > 0"``).
    check : Callable[[Any], bool]
        Predicate taking the parametrization instance.
    """

    description: str
    check: Callable[[Any], bool]

    def holds(self, parameters: Parametrization) -> bool:
        return bool(self.check(parameters))


class Parametrization(ABC):
    """
    Base class of family parametrizations.

    Concrete parametrizations are frozen dataclasses: equal parameter values
    compare (and hash) equal, and a validated instance can never change.
    """

    # set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[tuple[ParametrizationConstraint, ...]] = ()

    def __post_init__(self) -> None:
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, np.generic):
                object.__setattr__(self, f.name, value.item())

    @property
    def name(self) -> str:
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Parameter values, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))  # type: ignore[arg-type]

    @property
    def constraints(self) -> tuple[ParametrizationConstraint, ...]:
        return self._constraints

    def violations(self) -> list[str]:
        """Descriptions of the constraints that do not hold, in declaration order."""
        return [c.description for c in self._constraints if not c.holds(self)]

    def validate(self) -> None:
        """
        Check every constraint.

        Raises
        ------
        DomainError
            Naming the first constraint that does not hold.
        """
        for item in self._constraints:
            if not item.holds(self):
                raise DomainError(f'Constraint "{item.description}" does not hold')

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Equivalent parameters in the family's base parametrization.

        The base parametrization returns itself; others override this.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Mark an instance method of a parametrization as a constraint.

    The method's result is coerced to ``bool``. The marker attributes
    ``__is_constraint`` and ``__constraint_description`` are set on the
    returned function.

    Examples
    --------
    >>> @constraint("sigma > 0")
    ... def check_sigma_positive(self) -> bool:
    ...     return self.sigma > 0
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type[Parametrization]) -> tuple[ParametrizationConstraint, ...]:
    # walk base classes first so that a subclass can override a constraint by name
    found: dict[str, ParametrizationConstraint] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, (staticmethod, classmethod)):
                if klass is cls:
                    raise TypeError(
                        f"@constraint '{attr_name}' must be an instance method, "
                        f"not @{type(attr).__name__}"
                    )
                continue
            if not isfunction(attr):
                continue
            if getattr(attr, "__is_constraint", False):
                found[attr_name] = ParametrizationConstraint(
                    description=getattr(attr, "__constraint_description", attr_name),
                    check=attr,
                )
            else:
                found.pop(attr_name, None)
    return tuple(found.values())


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Register a class as parametrization ``name`` of ``family``.

    The class is turned into a frozen, slotted dataclass (unless it already
    is a dataclass) and its ``@constraint`` methods are collected.

    Raises
    ------
    TypeError
        If the class defines a static or class method, which cannot act as
        a constraint.
    ValueError
        If ``family`` already has a parametrization called ``name``.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator


__all__ = [
    "ParametrizationConstraint",
    "Parametrization",
    "constraint",
    "parametrization",
]
