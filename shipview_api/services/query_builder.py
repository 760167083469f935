"""
ShipView API — Order Filter Query Builder
===========================================

What:  Turns OrderFilters into an ordered list of predicates and a WHERE clause.
How:   Each recognised filter field maps to one (column, operator) pair. Present
       values become Predicate tuples in a fixed order; the WHERE clause is the
       AND of the predicates, each value carried by a bound parameter.
Who:   OrderService, which feeds the same predicate list to both the row query
       and the count query.

Field mapping (in output order):
    status         → `Order_Status`     =
    business_unit  → `Business Unit`    =
    from_date      → `Ship Date`        >=
    to_date        → `Ship Date`        <=
    state          → `Ship To State`    =

Injection safety:
    Request values only ever travel as bound parameters. They are bound with
    a String type so the driver escapes them; no value is formatted into SQL
    text anywhere in this module.
"""

import operator
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from sqlalchemy import String, and_, literal
from sqlalchemy.sql.elements import ColumnElement

from shipview_api.models.order import order_query
from shipview_api.schemas.order import OrderFilters

_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "=": operator.eq,
    ">=": operator.ge,
    "<=": operator.le,
}

# (filter field, column name, operator), in predicate order
FILTER_FIELDS: List[Tuple[str, str, str]] = [
    ("status", "Order_Status", "="),
    ("business_unit", "Business Unit", "="),
    ("from_date", "Ship Date", ">="),
    ("to_date", "Ship Date", "<="),
    ("state", "Ship To State", "="),
]


class Predicate(NamedTuple):
    """A single column/operator/value condition, ANDed with the others."""

    field: str
    column: str
    operator: str
    value: str

    def to_clause(self) -> ColumnElement:
        column = order_query.c[self.column]
        return _OPERATORS[self.operator](column, literal(self.value, type_=String()))


def build_predicates(filters: OrderFilters) -> List[Predicate]:
    """
    Map the present filter values to predicates.

    Output order follows FILTER_FIELDS regardless of the order the client
    sent the parameters in. Empty strings count as absent.
    """
    predicates: List[Predicate] = []
    for field, column, op in FILTER_FIELDS:
        value = getattr(filters, field)
        if value:
            predicates.append(Predicate(field, column, op, value))
    return predicates


def bound_values(predicates: List[Predicate]) -> List[str]:
    """Values in the same order as their placeholders in the WHERE clause."""
    return [p.value for p in predicates]


def build_where_clause(predicates: List[Predicate]) -> Optional[ColumnElement]:
    """
    AND of all predicates, or None when there are none.

    None means the caller emits no WHERE clause at all.
    """
    if not predicates:
        return None
    return and_(*(p.to_clause() for p in predicates))


def render_where_clause(predicates: List[Predicate], dialect=None) -> str:
    """
    WHERE clause text with placeholders, for logging and tests.

    Returns "" when there are no predicates. With no dialect given the
    default SQLAlchemy compiler is used (named `:param_N` placeholders).
    """
    clause = build_where_clause(predicates)
    if clause is None:
        return ""
    compiled = clause.compile(dialect=dialect) if dialect is not None else clause.compile()
    return f"WHERE {compiled}"
