from collections.abc import Mapping, Sized

from ..schema import Schema
from ..schema.errors import SchemaError
from ..schema.util import get_literal_name, is_number, is_enum_class, commajoin_as_strings
from .base import Constraint


def strict_equal(a, b):
    """ Test two values for strict equality: same value, and compatible types.

    Numbers compare by value (`1 == 1.0`), but `True` is not `1`, and `'1'` is not `1`.
    """
    if a is b:
        return True
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


class Literal(Schema):
    """ Validate that the value is strictly equal to the given literal.

    ```python
    from kanon import Literal

    schema = Literal('admin')
    schema('admin')  #-> 'admin'
    schema('user')
    #-> ValidationError: Expected literal value 'admin', got str
    ```

    :param literal: The expected value
    """
    type = 'literal'

    def __init__(self, literal, message=None):
        super(Literal, self).__init__(message)
        self.literal = literal
        self.expects = get_literal_name(literal)

    def run(self, dataset, config):
        if strict_equal(dataset.value, self.literal):
            return dataset.succeed(dataset.value)
        return dataset.fail(self.issue(dataset, config, requirement=self.literal))


class Enum(Schema):
    """ Validate that the value is one of the given literals.

    The literals may be of mixed types: strings, numbers, booleans; every one is compared strictly:

    ```python
    from kanon import Enum

    schema = Enum(['red', 'green', 0])
    schema('red')  #-> 'red'
    schema(False)
    #-> ValidationError: Expected one of ['red', 'green', 0], got bool
    ```

    :param values: Allowed values
    :type values: Iterable
    """
    type = 'enum'

    def __init__(self, values, message=None):
        super(Enum, self).__init__(message)
        self.values = tuple(values)
        if not self.values:
            raise SchemaError('Enum requires at least one value')
        self.expects = commajoin_as_strings(map(get_literal_name, self.values))

    def __contains__(self, v):
        return any(strict_equal(v, value) for value in self.values)

    def run(self, dataset, config):
        if dataset.value in self:
            return dataset.succeed(dataset.value)
        return dataset.fail(self.issue(dataset, config, requirement=self.values))


class NativeEnum(Schema):
    """ Validate that the value belongs to a Python `enum.Enum` class.

    Both members and member values are accepted, and the value is left unchanged:

    ```python
    from enum import Enum
    from kanon import NativeEnum

    class Color(Enum):
        RED = 'r'
        GREEN = 'g'

    schema = NativeEnum(Color)
    schema(Color.RED)  #-> Color.RED
    schema('r')  #-> 'r'
    schema('b')
    #-> ValidationError: Expected one of [Color.RED, Color.GREEN], got str
    ```

    :param enum: The enum class
    :type enum: type
    """
    type = 'native_enum'

    def __init__(self, enum, message=None):
        super(NativeEnum, self).__init__(message)
        if not is_enum_class(enum):
            raise SchemaError('NativeEnum requires an Enum class, got {!r}'.format(enum))
        self.enum = enum
        self.expects = commajoin_as_strings(map(get_literal_name, enum))

    def __contains__(self, v):
        if isinstance(v, self.enum):
            return True
        return any(strict_equal(v, member.value) for member in self.enum)

    def run(self, dataset, config):
        if dataset.value in self:
            return dataset.succeed(dataset.value)
        return dataset.fail(self.issue(dataset, config, requirement=self.enum))


def collection_name(v):
    """ Get the catalog prefix for a sized value: 'string', 'array', 'set' or 'map' """
    if isinstance(v, (str, bytes)):
        return 'string'
    if isinstance(v, (set, frozenset)):
        return 'set'
    if isinstance(v, Mapping):
        return 'map'
    return 'array'


class LengthConstraint(Constraint):
    """ Base for length constraints: works with strings, lists, tuples, sets and mappings """

    def __init__(self, schema, length, message=None, abort=False):
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise SchemaError('{} requires a non-negative integer, got {!r}'.format(type(self).__name__, length))
        super(LengthConstraint, self).__init__(schema, length, message, abort)

    def catalog_key(self, value):
        if not isinstance(value, Sized):
            return 'unsized_length'
        return '{}_{}'.format(collection_name(value), self.type)

    def received(self, value):
        return str(len(value)) if isinstance(value, Sized) else super(LengthConstraint, self).received(value)


class MinLength(LengthConstraint):
    """ Validate that the length is at least `length`

    ```python
    from kanon import MinLength, String

    schema = MinLength(String(), 3)
    schema('abc')  #-> 'abc'
    schema('ab')
    #-> ValidationError: String must be at least 3 characters long: expected min_length(3), got 2
    ```
    """
    type = 'min_length'

    def test(self, value):
        return isinstance(value, Sized) and len(value) >= self.requirement


class MaxLength(LengthConstraint):
    """ Validate that the length is at most `length` """
    type = 'max_length'

    def test(self, value):
        return isinstance(value, Sized) and len(value) <= self.requirement


class Length(LengthConstraint):
    """ Validate that the length is exactly `length` """
    type = 'length'

    def test(self, value):
        return isinstance(value, Sized) and len(value) == self.requirement


__all__ = ('Literal', 'Enum', 'NativeEnum', 'MinLength', 'MaxLength', 'Length')
