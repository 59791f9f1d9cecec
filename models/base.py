"""
models/base.py
--------------
Shared row-to-dataclass plumbing for the domain models.
"""

from dataclasses import asdict, fields
from typing import Any, Mapping, TypeVar

T = TypeVar("T", bound="RowModel")


class RowModel:
    """Mixin for dataclasses that are instantiated from query rows."""

    @classmethod
    def from_row(cls: type[T], row: Mapping[str, Any], **extra: Any) -> T:
        """
        Build an instance from a row dict.

        Columns the dataclass does not declare are ignored, so a wider
        SELECT (or a join) can be reused for a narrower model.
        """
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in {**row, **extra}.items() if k in names}
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)
