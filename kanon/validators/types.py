""" Primitive schemas: one schema per intrinsic type.

Each of them performs a strict type check, and leaves the value unchanged:

```python
from kanon import String

schema = String()
schema('a')  #-> 'a'
schema(1)
#-> ValidationError: Expected string: expected str, got int
```

For relaxed checks that convert the input, see the [coercion schemas](#coercion).
"""

from datetime import datetime

from ..schema import Schema
from ..schema.util import const, Sentinel, is_number, is_bigint


class Primitive(Schema):
    """ Base for type-checking schemas.

    Subclasses implement `typecheck(value)`
    """

    def typecheck(self, v):
        """ Test the type of the value

        :rtype: bool
        """
        raise NotImplementedError

    def run(self, dataset, config):
        # Type check
        if not self.typecheck(dataset.value):
            # expected=<type>, received=<type>
            return dataset.fail(self.issue(dataset, config))
        # Fine
        return dataset.succeed(dataset.value)


class String(Primitive):
    """ Validate that the value is a `str`.

    Binary strings (`bytes`) are not accepted: use [`CoerceString`](#coercestring) to decode them.
    """
    type = 'string'
    expects = 'str'

    def typecheck(self, v):
        return isinstance(v, str)


class Number(Primitive):
    """ Validate that the value is a number: `int` or `float`.

    `bool` is not a number, even though Python thinks otherwise; `NaN` is not a number either:

    ```python
    from kanon import Number

    schema = Number()
    schema(1)  #-> 1
    schema(1.5)  #-> 1.5
    schema(True)
    #-> ValidationError: Expected number: expected number, got bool
    ```
    """
    type = 'number'
    expects = 'number'

    def typecheck(self, v):
        return is_number(v)


class Integer(Primitive):
    """ Validate that the value is an integer number: an `int`, or a `float` with no fractional part """
    type = 'integer'
    expects = 'int'

    def typecheck(self, v):
        if is_bigint(v):
            return True
        return isinstance(v, float) and v.is_integer()


class Boolean(Primitive):
    """ Validate that the value is a `bool` """
    type = 'boolean'
    expects = 'bool'

    def typecheck(self, v):
        return isinstance(v, bool)


class BigInt(Primitive):
    """ Validate that the value is an arbitrary-precision integer: `int`, but not `bool` """
    type = 'bigint'
    expects = 'int'

    def typecheck(self, v):
        return is_bigint(v)


class Date(Primitive):
    """ Validate that the value is a `datetime` """
    type = 'date'
    expects = 'datetime'

    def typecheck(self, v):
        return isinstance(v, datetime)


class Symbol(Primitive):
    """ Validate that the value is a unique [`Sentinel`](#sentinel) object """
    type = 'symbol'
    expects = 'sentinel'

    def typecheck(self, v):
        return isinstance(v, Sentinel)


class Null(Primitive):
    """ Validate that the value is `None` """
    type = 'null'
    expects = 'None'

    def typecheck(self, v):
        return v is None


class Undefined(Primitive):
    """ Validate that no value was provided: the value is `UNDEFINED` """
    type = 'undefined'
    expects = 'undefined'

    def typecheck(self, v):
        return v is const.UNDEFINED


class Void(Undefined):
    """ Same as [`Undefined`](#undefined): for "returns nothing" semantics """
    type = 'void'


class AnyValue(Schema):
    """ Accept anything """
    type = 'any'
    expects = 'any'

    def run(self, dataset, config):
        return dataset.succeed(dataset.value)


class Unknown(AnyValue):
    """ Accept anything, and tell the reader that the value still needs to be narrowed down """
    type = 'unknown'
    expects = 'unknown'


class Never(Schema):
    """ Accept nothing """
    type = 'never'
    expects = 'never'

    def run(self, dataset, config):
        return dataset.fail(self.issue(dataset, config))


__all__ = ('String', 'Number', 'Integer', 'Boolean', 'BigInt', 'Date', 'Symbol',
           'Null', 'Undefined', 'Void', 'AnyValue', 'Unknown', 'Never')
