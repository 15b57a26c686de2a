"""Build clauses that filter entities by their private settings."""

import re

from storm.expr import And, Or, Not, Join, SQL
from storm.info import ClassAlias

from socialdb.data.entity import Entity
from socialdb.data.setting import PrivateSetting, toSettingValue
from socialdb.query.exceptions import (
    InvalidOperandError, InvalidOperatorError, QueryError)


COMPARISONS = {
    '=': lambda expr, value: expr == value,
    '!=': lambda expr, value: expr != value,
    '<>': lambda expr, value: expr != value,
    '<': lambda expr, value: expr < value,
    '>': lambda expr, value: expr > value,
    '<=': lambda expr, value: expr <= value,
    '>=': lambda expr, value: expr >= value,
    'IN': lambda expr, values: expr.is_in(values),
    'NOT IN': lambda expr, values: Not(expr.is_in(values)),
    'LIKE': lambda expr, value: expr.like(value),
    'NOT LIKE': lambda expr, value: Not(expr.like(value)),
}

LIST_OPERANDS = ('IN', 'NOT IN')

STRING_OPERANDS = ('LIKE', 'NOT LIKE')

PAIR_OPERATORS = {'AND': And, 'OR': Or}

NUMERIC_REGEXP = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')


def isNumeric(value):
    """Determine if C{value} should be compared as a number.

    @param value: An C{int}, C{float} or C{str} value.  Booleans and integers
        too large for a C{float} are never numeric.
    @return: C{True} if C{value} is a number or a string holding a decimal
        number, otherwise C{False}.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return True
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return False
        return True
    return isinstance(value, str) and NUMERIC_REGEXP.match(value) is not None


def _toList(value):
    """Wrap scalars in a C{list}."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


class PrivateSettingFilter(object):
    """Clauses that match entities with particular private settings.

    @param names: Optionally, a setting name or a sequence of names.  Matching
        entities have a setting with one of these names.
    @param values: Optionally, a setting value or a sequence of values.
        Matching entities have a setting with one of these values.  Falsy
        values are matched as C{'0'}.
    @param pairs: Optionally, name/value pairs that must all (or any, see
        C{pairOperator}) hold for matching entities.  Either a single pair
        C{dict} with C{name}, C{value} and, optionally, C{operand} keys, a
        sequence of such C{dict}s or C{(name, value[, operand])} tuples, or a
        C{{name: value}} mapping.
    @param pairOperator: Optionally, C{AND} (the default) or C{OR}, to
        combine pair conditions with.
    @param namePrefix: Optionally, a prefix to apply to all setting names,
        used to namespace plugin and user settings.
    @raise InvalidOperatorError: Raised if C{pairOperator} is not C{AND} or
        C{OR}.
    """

    def __init__(self, names=None, values=None, pairs=None,
                 pairOperator='AND', namePrefix=''):
        operator = (pairOperator or 'AND').strip().upper()
        if operator not in PAIR_OPERATORS:
            raise InvalidOperatorError(
                '%r is not a valid pair operator.' % pairOperator)
        self._names = names
        self._values = values
        self._pairs = pairs
        self._pairOperator = operator
        self._namePrefix = namePrefix or ''

    def getClauses(self):
        """Build the join and where clauses for this filter.

        The private settings table is always joined, so only entities with
        at least one private setting can match.  Each name/value pair gets a
        join of its own.

        @raise InvalidOperandError: Raised if a pair uses an unsupported
            operand.
        @return: A C{(joins, wheres)} 2-tuple with C{list}s of Storm
            expressions.
        """
        settings = ClassAlias(PrivateSetting, 'ps')
        joins = [Join(settings, Entity.guid == settings.entityGUID)]
        conditions = []

        match = [condition for condition in
                 (self._getNamesCondition(settings),
                  self._getValuesCondition(settings))
                 if condition is not None]
        if match:
            conditions.append(And(*match))

        pairConditions = []
        for name, value, operand in self._getPairs():
            alias = 'ps%d' % (len(pairConditions) + 1)
            pairSettings = ClassAlias(PrivateSetting, alias)
            condition = self._getPairCondition(pairSettings, alias, name,
                                               value, operand)
            if condition is None:
                continue
            joins.append(Join(pairSettings,
                              Entity.guid == pairSettings.entityGUID))
            pairConditions.append(condition)
        if pairConditions:
            combine = PAIR_OPERATORS[self._pairOperator]
            conditions.append(combine(*pairConditions))

        wheres = [And(*conditions)] if conditions else []
        return joins, wheres

    def _getName(self, name):
        """Apply the name prefix to C{name}."""
        return self._namePrefix + str(name)

    def _getNamesCondition(self, settings):
        if self._names is None:
            return None
        names = [self._getName(name) for name in _toList(self._names)
                 if name is not None]
        if not names:
            return None
        return settings.name.is_in(names)

    def _getValuesCondition(self, settings):
        if self._values is None:
            return None
        values = [toSettingValue(value) if value else '0'
                  for value in _toList(self._values)]
        if not values:
            return None
        return settings.value.is_in(values)

    def _getPairs(self):
        """Unpack the name/value pairs in their supported layouts.

        @raise QueryError: Raised if a tuple pair doesn't have two or three
            items.
        @return: A generator yielding C{(name, value, operand)} 3-tuples.
        """
        pairs = self._pairs
        if pairs is None:
            return
        if isinstance(pairs, dict):
            if 'name' in pairs or 'value' in pairs:
                pairs = [pairs]
            else:
                pairs = [pair if isinstance(pair, dict) else (name, pair)
                         for name, pair in pairs.items()]
        for pair in pairs:
            if isinstance(pair, dict):
                yield pair.get('name'), pair.get('value'), pair.get('operand')
                continue
            pair = tuple(pair)
            if len(pair) not in (2, 3):
                raise QueryError('Invalid name/value pair: %r' % (pair,))
            operand = pair[2] if len(pair) == 3 else None
            yield pair[0], pair[1], operand

    def _getPairCondition(self, settings, alias, name, value, operand):
        """Build the condition for a single name/value pair.

        @return: A Storm expression or C{None} if the pair should be skipped.
        """
        if name is None or value is None:
            return None
        operand = ' '.join((operand or '=').split()).upper()
        if operand not in COMPARISONS:
            raise InvalidOperandError(operand)

        if isinstance(value, (list, tuple, set, frozenset)):
            if operand not in LIST_OPERANDS:
                operand = 'IN'
            values = [toSettingValue(item) for item in value]
        elif operand in LIST_OPERANDS:
            values = [item.strip().strip('\'"')
                      for item in toSettingValue(value).split(',')]
            values = [item for item in values if item]
        else:
            values = None

        compare = COMPARISONS[operand]
        if values is not None:
            if not values:
                return None
            comparison = compare(settings.value, values)
        elif isNumeric(value) and operand not in STRING_OPERANDS:
            # The value column holds strings, cast it so '15' > '5'.
            numericValue = SQL('CAST(%s.value AS REAL)' % alias)
            comparison = compare(numericValue, float(value))
        else:
            comparison = compare(settings.value, toSettingValue(value))
        return And(settings.name == self._getName(name), comparison)
