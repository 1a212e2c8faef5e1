""" Misc utilities """

import math
from collections.abc import Mapping
from datetime import date, time, datetime, timedelta
from decimal import Decimal
from enum import Enum, EnumMeta


class Undefined(object):
    """ Special singleton object to represent the case when no value was provided.

    This is what a schema receives for a mapping key that is absent from the input,
    and what `Optional` passes through untouched.

    It is never equal to anything, and it's falsy, so it never sneaks through a truthiness check.
    """

    _instance = None

    def __new__(cls):
        # Singleton
        if cls._instance is None:
            cls._instance = super(Undefined, cls).__new__(cls)
        return cls._instance

    def __eq__(self, other):
        return other is self

    def __ne__(self, other):
        return other is not self

    def __hash__(self):
        return id(self)

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (Undefined, ())

    def __repr__(self):
        return '<Undefined>'


class Sentinel(object):
    """ A unique named marker object: the closest Python has to a symbol.

    Two sentinels are never equal, even with the same name:

    ```python
    from kanon import Sentinel

    MISSING = Sentinel('MISSING')
    MISSING == Sentinel('MISSING')  #-> False
    ```

    :param name: Human-readable name, used in `repr()`
    :type name: str
    """

    __slots__ = ('name', '__weakref__')

    def __init__(self, name=None):
        self.name = name

    def __repr__(self):
        return 'Sentinel({})'.format(self.name or '')


__type_names = {
    type(None): 'None',
    Undefined:  'undefined',
    bool:       'bool',
    int:        'int',
    float:      'float',
    complex:    'complex',
    Decimal:    'Decimal',
    str:        'str',
    bytes:      'bytes',
    tuple:      'tuple',
    list:       'list',
    set:        'set',
    frozenset:  'frozenset',
    dict:       'dict',
    date:       'date',
    time:       'time',
    datetime:   'datetime',
    timedelta:  'timedelta',
    Sentinel:   'sentinel',
}


def register_type_name(t, name):
    """ Register a human-friendly name for the given type. This will be used as `Issue.received`

    :param t: The type to register
    :type t: type
    :param name: Name for the type
    :type name: str
    """
    assert isinstance(t, type)
    assert isinstance(name, str)
    __type_names[t] = name


def get_type_name(t):
    """ Get a human-friendly name for the given type.

    :type t: type
    :rtype: str
    """
    # Lookup in the mapping
    try:
        return __type_names[t]
    except KeyError:
        # Specific types
        if issubclass(t, Enum):
            return 'Enum'
        if issubclass(t, Mapping):
            return 'Mapping'

        # Get name from the Type itself
        return t.__name__


def get_received(v):
    """ Get the `Issue.received` tag for the given input value.

    NaN floats are reported as `'NaN'`: they have the right type, but are never a number.

    :param v: Input value
    :rtype: str
    """
    if type(v) is float and math.isnan(v):
        return 'NaN'
    return get_type_name(type(v))


def get_literal_name(v):
    """ Get a human-friendly name for the given literal.

    :param v: Value
    :rtype: str
    """
    if isinstance(v, Enum):
        return '{}.{}'.format(type(v).__name__, v.name)
    return repr(v)


def get_callable_name(c):
    """ Get a human-friendly name for the given callable.

    :param c: The callable to get the name for
    :type c: callable
    :rtype: str
    """
    if hasattr(c, 'name'):
        return str(c.name)
    elif hasattr(c, '__name__'):
        return str(c.__name__) + '()'
    else:
        return str(c)


def is_enum_class(v):
    """ Test whether the value is an `Enum` class (not an `Enum` member) """
    return isinstance(v, EnumMeta)


def is_number(v):
    """ Test whether the value is an `int` or a non-NaN `float`.

    `bool` is excluded even though it subclasses `int`.
    """
    t = type(v)
    if t is int:
        return True
    if t is float:
        return not math.isnan(v)
    if t is bool:
        return False
    return isinstance(v, (int, float)) and not isinstance(v, bool) and v == v


def is_bigint(v):
    """ Test whether the value is an `int` (excluding `bool`) """
    return isinstance(v, int) and not isinstance(v, bool)


def commajoin_as_strings(iterable, sep=', '):
    """ Join the given iterable with ', ' """
    return sep.join(str(i) for i in iterable)


class const:
    """ Misc constants """

    #: Undefined singleton
    UNDEFINED = Undefined()

    #: Exception classes that mean "this value cannot be converted" when raised by a coercion
    coercion_exceptions = (TypeError, ValueError, OverflowError, ArithmeticError)
