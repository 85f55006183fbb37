"""Category and Brand: the two ways products are grouped in the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from backoffice.domain.exceptions import ValidationError

_T = TypeVar("_T", bound="_Classification")


@dataclass
class _Classification:
    id: int | None
    name: str
    description: str = ""

    @classmethod
    def create(cls: type[_T], name: str, description: str = "") -> _T:
        return cls(id=None, name=_required_name(name, cls.__name__),
                   description=description.strip())

    def rename(self, name: str) -> None:
        self.name = _required_name(name, type(self).__name__)

    def describe(self, description: str) -> None:
        self.description = description.strip()


@dataclass
class Category(_Classification):
    pass


@dataclass
class Brand(_Classification):
    pass


def _required_name(name: str, kind: str) -> str:
    if not name or not name.strip():
        raise ValidationError(f"{kind} name is required")
    return name.strip()
