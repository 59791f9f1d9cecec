"""
utils/responses.py
------------------
Response bodies for the outward boundary:
    {"user": {...}}, {"users": [...]}, {"deleted": id}
"""

from typing import Iterable

from models.base import RowModel


def one(name: str, entity: RowModel) -> dict:
    return {name: entity.to_dict()}


def many(name: str, entities: Iterable[RowModel]) -> dict:
    return {name: [e.to_dict() for e in entities]}


def deleted(record_id) -> dict:
    return {"deleted": record_id}
