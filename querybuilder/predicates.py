"""
======================================
WHERE clause accumulation for builders.
======================================

PredicateClause collects a ``WHERE`` seed and any number of ``AND`` / ``OR``
fragments together with their positional parameters. PredicateMixin exposes
the chaining API (where / and_ / or_) to the SELECT, UPDATE and DELETE
builders, which all share one accumulator implementation.

Rules:
- where() starts over: the seed is replaced and earlier AND/OR fragments and
  their parameters are discarded.
- and_() / or_() on an empty clause act exactly like where().
- Parameters are kept in call order, which is also placeholder order.

Example:
    >>> clause = PredicateClause()
    >>> clause.where('age > ?', 18).and_('status = ?', 'active').or_('vip = 1')
    >>> clause.render()
    ('WHERE age > ? AND status = ? OR vip = 1', [18, 'active'])
"""

from typing import Any, List, Tuple

from core.exceptions import ParameterMismatchError
from querybuilder.placeholders import count_placeholders


class PredicateClause:
    """Ordered WHERE/AND/OR fragments plus their bound parameters."""

    def __init__(self):
        self._seed: str = ""
        self._fragments: List[str] = []
        self._parameters: List[Any] = []

    @property
    def is_empty(self) -> bool:
        return not self._seed

    def where(self, condition: str, *params: Any) -> 'PredicateClause':
        """
        Start the clause with ``WHERE <condition>``.

        Args:
            condition: Condition text, using ``?`` for bound values
            *params: Values for the condition's placeholders, in order

        Returns:
            This clause, for chaining
        """
        self._check_parameters(condition, params)
        self._seed = f"WHERE {condition}"
        self._fragments = []
        self._parameters = list(params)
        return self

    def and_(self, condition: str, *params: Any) -> 'PredicateClause':
        """Append ``AND <condition>``, or seed the clause if it is empty."""
        return self._append('AND', condition, params)

    def or_(self, condition: str, *params: Any) -> 'PredicateClause':
        """Append ``OR <condition>``, or seed the clause if it is empty."""
        return self._append('OR', condition, params)

    def render(self) -> Tuple[str, List[Any]]:
        """
        Render the clause text and its parameters.

        Returns:
            Tuple of (clause text, parameter list); ("", []) when empty
        """
        if self.is_empty:
            return "", []
        return " ".join([self._seed] + self._fragments), list(self._parameters)

    def _append(self, keyword: str, condition: str, params: tuple) -> 'PredicateClause':
        if self.is_empty:
            return self.where(condition, *params)

        self._check_parameters(condition, params)
        self._fragments.append(f"{keyword} {condition}")
        self._parameters.extend(params)
        return self

    @staticmethod
    def _check_parameters(condition: str, params: tuple) -> None:
        expected = count_placeholders(condition)
        if expected != len(params):
            raise ParameterMismatchError(
                f"Condition {condition!r} has {expected} placeholder(s) "
                f"but {len(params)} parameter(s) were given"
            )


class PredicateMixin:
    """Chaining predicate methods for builders owning a ``_predicate`` clause."""

    _predicate: PredicateClause

    def where(self, condition: str, *params: Any):
        """
        Set the WHERE condition, discarding any earlier AND/OR conditions.

        Args:
            condition: Condition text (e.g. "id = ?")
            *params: Values for the condition's placeholders

        Returns:
            The builder, for chaining
        """
        self._predicate.where(condition, *params)
        return self

    def and_(self, condition: str, *params: Any):
        """Add an AND condition (becomes the WHERE condition if none is set)."""
        self._predicate.and_(condition, *params)
        return self

    def or_(self, condition: str, *params: Any):
        """Add an OR condition (becomes the WHERE condition if none is set)."""
        self._predicate.or_(condition, *params)
        return self
