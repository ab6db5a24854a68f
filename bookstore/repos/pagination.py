# bookstore/repos/pagination.py
from typing import Mapping, Sequence

from sqlalchemy import Select
from sqlalchemy.sql.elements import ColumnElement

from bookstore.domain.schemas import PageRequest
from bookstore.utils.settings import MAX_PAGE_SIZE

_DIRECTIONS = ("asc", "desc")


def parse_sort(sort: Sequence[str], sortable: Mapping[str, ColumnElement]) -> list:
    """
    "title,desc" -> title DESC, "price" -> price ASC.
    Dozwolone tylko kolumny z sortable.
    """
    clauses = []
    for entry in sort:
        if not entry or not entry.strip():
            continue
        field, _, direction = entry.strip().partition(",")
        field = field.strip()
        direction = (direction.strip() or "asc").lower()

        if field not in sortable:
            raise ValueError(f"Can't sort by unknown field: {field}")
        if direction not in _DIRECTIONS:
            raise ValueError(f"Invalid sort direction: {direction}")

        column = sortable[field]
        clauses.append(column.desc() if direction == "desc" else column.asc())
    return clauses


def paginate(
    stmt: Select,
    page: PageRequest,
    sortable: Mapping[str, ColumnElement],
    tiebreaker: ColumnElement,
    default_sort: Sequence[str] = (),
) -> Select:
    order_by = parse_sort(page.sort or default_sort, sortable)
    # stabilna kolejnosc stron
    order_by.append(tiebreaker.asc())

    size = min(page.size, MAX_PAGE_SIZE)
    return stmt.order_by(*order_by).offset(page.page * size).limit(size)
