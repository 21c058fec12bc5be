"""
Family Register
===============

Process-wide lookup of parametric families by name, with queries by kind and
by declared output type. Families register themselves when configured (see
:func:`rvcore.families.configuration.configure_families_register`); the
register never builds families on its own.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from rvcore.families.parametric_family import ParametricFamily
    from rvcore.outputs import OutputType
    from rvcore.types import Kind


class ParametricFamilyRegister:
    """
    Singleton register of parametric families.

    Families are kept in registration order. Distributions look their family
    up here by name, so a family must be registered before any of its
    distributions is used.

    Examples
    --------
    >>> ParametricFamilyRegister.get("Bernoulli")
    ParametricFamily(Bernoulli)
    >>> [f.name for f in ParametricFamilyRegister.instantiated_for(Bool)]
    ['Bernoulli']
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._families = {}
            cls._instance = instance
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Family registered under ``name``.

        Raises
        ------
        ValueError
            If no such family is registered; the message lists the known
            names.
        """
        families = cls()._families
        try:
            return families[name]
        except KeyError:
            known = ", ".join(families) or "none"
            raise ValueError(f"No family {name} found in register (known: {known})") from None

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._families

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Add ``family`` under its name.

        Raises
        ------
        ValueError
            If the name is taken.
        """
        families = cls()._families
        if family.name in families:
            raise ValueError(f"Family {family.name} already found in register")
        families[family.name] = family

    @classmethod
    def names(cls) -> list[str]:
        """Registered names, in registration order."""
        return list(cls()._families)

    @classmethod
    def of_kind(cls, kind: Kind) -> list[ParametricFamily]:
        """Registered families whose distributions are of ``kind``."""
        return [family for family in cls()._families.values() if family.kind == kind]

    @classmethod
    def instantiated_for(cls, output_type: OutputType) -> list[ParametricFamily]:
        """Registered families declaring ``output_type``."""
        return [
            family for family in cls()._families.values() if output_type in family.output_types
        ]

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
