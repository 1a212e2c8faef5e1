import math
import operator
from datetime import datetime
from fractions import Fraction

from ..schema.errors import SchemaError
from ..schema.util import is_bigint, is_number
from .base import Constraint


class RangeConstraint(Constraint):
    """ Base for comparison constraints.

    Work with anything comparable: numbers, bigints, dates.
    Dates get their own default messages.
    """

    #: Catalog key for numbers. Dates use 'date_' + this key
    number_catalog = None

    #: Comparison: `op(value, requirement)`
    op = None

    def __init__(self, schema, requirement, message=None, abort=False):
        if requirement is None:
            raise SchemaError('{} requires a bound'.format(type(self).__name__))
        super(RangeConstraint, self).__init__(schema, requirement, message, abort)

    def catalog_key(self, value):
        if isinstance(value, datetime):
            return 'date_' + self.type
        return self.number_catalog or self.type

    def received(self, value):
        if isinstance(value, datetime):
            return value.isoformat()
        return repr(value)

    def test(self, value):
        try:
            return self.op(value, self.requirement)
        except TypeError:
            # Not comparable: naive vs aware dates, strings vs numbers
            return False


class MinValue(RangeConstraint):
    """ Validate that the value is at least `requirement` (inclusive)

    ```python
    from kanon import Number, MinValue

    schema = MinValue(Number(), 18)
    schema(18)  #-> 18
    schema(17)
    #-> ValidationError: Number must be at least 18: expected min_value(18), got 17
    ```
    """
    type = 'min_value'
    number_catalog = 'number_min_value'
    op = operator.ge


class MaxValue(RangeConstraint):
    """ Validate that the value is at most `requirement` (inclusive) """
    type = 'max_value'
    number_catalog = 'number_max_value'
    op = operator.le


class GreaterThan(RangeConstraint):
    """ Validate that the value is greater than `requirement` (exclusive) """
    type = 'greater_than'
    op = operator.gt


class LessThan(RangeConstraint):
    """ Validate that the value is less than `requirement` (exclusive) """
    type = 'less_than'
    op = operator.lt


class MultipleOf(Constraint):
    """ Validate that the number is a multiple of `requirement`.

    The remainder is computed exactly, and floats are accepted within a small tolerance,
    so `MultipleOf(Number(), 0.1)` accepts `0.3`. Infinity is not a multiple of anything.
    """
    type = 'multiple_of'

    def __init__(self, schema, requirement, message=None, abort=False):
        if not is_number(requirement) or requirement == 0 or (isinstance(requirement, float) and math.isinf(requirement)):
            raise SchemaError('MultipleOf requires a finite non-zero number, got {!r}'.format(requirement))
        super(MultipleOf, self).__init__(schema, requirement, message, abort)

    def received(self, value):
        return repr(value)

    def test(self, value):
        if not is_number(value) or (isinstance(value, float) and math.isinf(value)):
            return False
        if is_bigint(value) and is_bigint(self.requirement):
            return value % self.requirement == 0

        value, requirement = Fraction(value), Fraction(self.requirement)
        remainder = value - round(value / requirement) * requirement
        return abs(remainder) <= 1e-9


class Positive(Constraint):
    """ Validate that the number is greater than zero """
    type = 'positive'

    def __init__(self, schema, message=None, abort=False):
        super(Positive, self).__init__(schema, None, message, abort)

    def received(self, value):
        return repr(value)

    def test(self, value):
        return is_number(value) and value > 0


class Negative(Constraint):
    """ Validate that the number is less than zero """
    type = 'negative'

    def __init__(self, schema, message=None, abort=False):
        super(Negative, self).__init__(schema, None, message, abort)

    def received(self, value):
        return repr(value)

    def test(self, value):
        return is_number(value) and value < 0


__all__ = ('MinValue', 'MaxValue', 'GreaterThan', 'LessThan', 'MultipleOf', 'Positive', 'Negative')
