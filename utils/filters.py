from typing import Any, Callable


class FilterBuilder:
    """
    Collects optional predicates and applies them to a query in one go.

    Each predicate is a SQLAlchemy expression, so the values stay bound
    parameters in the rendered statement:

        filters = FilterBuilder()
        filters.add_if(room_id, lambda v: Booking.room_id == v)
        q = filters.apply(Booking.query)
    """

    def __init__(self):
        self._clauses = []

    def add_if(self, value: Any, build: Callable[[Any], Any]) -> "FilterBuilder":
        # None means "not supplied"; 0 and empty strings are real values
        if value is not None:
            self._clauses.append(build(value))
        return self

    def apply(self, query):
        if not self._clauses:
            return query
        return query.filter(*self._clauses)
