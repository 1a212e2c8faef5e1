""" Coercion schemas: best-effort conversion from common alternate representations.

Each coercion schema accepts the target type as is, and tries to convert everything else:

```python
from kanon import CoerceNumber

schema = CoerceNumber()
schema(42)  #-> 42
schema('42')  #-> 42
schema(' 1.5 ')  #-> 1.5
schema('abc')
#-> ValidationError: Cannot coerce to number: expected number, got str
```

Coercion never raises: when a conversion fails, it's reported as a `'schema'` issue.
"""

import math
from datetime import date, time, datetime, timedelta, timezone

from ..schema import Schema
from ..schema.util import const, is_number, is_bigint


#: Origin for the millisecond timestamps
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Coerce(Schema):
    """ Base for coercion schemas.

    Subclasses implement `accepts(value)` (the value already has the target type)
    and `convert(value)`, which may raise any of `const.coercion_exceptions`.
    """

    #: Catalog key for the default message
    catalog = None

    def accepts(self, v):
        raise NotImplementedError

    def convert(self, v):
        raise NotImplementedError

    def catalog_key(self, v):
        """ Catalog key for the value that can't be converted """
        return self.catalog

    def run(self, dataset, config):
        value = dataset.value
        if self.accepts(value):
            return dataset.succeed(value)

        try:
            converted = self.convert(value)
        except const.coercion_exceptions:
            return dataset.fail(self.issue(dataset, config, catalog=self.catalog_key(value)))

        if not self.accepts(converted):
            return dataset.fail(self.issue(dataset, config, catalog=self.catalog_key(value)))
        return dataset.succeed(converted)


class CoerceString(Coerce):
    """ Convert the value to a `str`.

    `bytes` are decoded as UTF-8; everything else is converted with `str()`.
    Only `UNDEFINED` is not convertible: there's no value at all.
    """
    type = 'string'
    expects = 'str'
    catalog = 'coerce_string'

    def accepts(self, v):
        return isinstance(v, str)

    def convert(self, v):
        if v is const.UNDEFINED:
            raise ValueError(v)
        if isinstance(v, (bytes, bytearray)):
            return v.decode('utf-8')
        return str(v)


class CoerceNumber(Coerce):
    """ Convert the value to a number.

    * `bool`: `0` or `1`
    * `None`, an empty or blank string: `0`
    * `str`: parsed as an `int`, or as a `float`
    * Anything else is converted with `float()`

    A conversion that yields `NaN` is a failure.
    """
    type = 'number'
    expects = 'number'
    catalog = 'coerce_number'

    def accepts(self, v):
        return is_number(v)

    def convert(self, v):
        if isinstance(v, bool):
            return int(v)
        if v is None:
            return 0
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return 0
            try:
                return int(v)
            except ValueError:
                return float(v)
        if v is const.UNDEFINED:
            raise ValueError(v)
        return float(v)


class CoerceBoolean(Coerce):
    """ Convert the value to a `bool` using its truthiness. Never fails. """
    type = 'boolean'
    expects = 'bool'
    catalog = 'boolean'

    def accepts(self, v):
        return isinstance(v, bool)

    def convert(self, v):
        return bool(v)


class CoerceBigInt(Coerce):
    """ Convert the value to an `int`.

    * `bool`: `0` or `1`
    * `float`: only when it has no fractional part
    * `str`: parsed as an `int`; an empty or blank string is `0`
    * `None` and `UNDEFINED` are rejected
    * Anything else is converted via its string representation
    """
    type = 'bigint'
    expects = 'int'
    catalog = 'coerce_bigint'

    def accepts(self, v):
        return is_bigint(v)

    def catalog_key(self, v):
        if v is None:
            return 'coerce_none_bigint'
        if v is const.UNDEFINED:
            return 'coerce_undefined_bigint'
        return self.catalog

    def convert(self, v):
        if isinstance(v, bool):
            return int(v)
        if v is None or v is const.UNDEFINED:
            raise TypeError(v)
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError(v)
            return int(v)
        if isinstance(v, str):
            v = v.strip()
            return int(v) if v else 0
        return int(str(v))


class CoerceDate(Coerce):
    """ Convert the value to a `datetime`.

    * `int`/`float`: a timestamp in milliseconds, in UTC
    * `bool`: `0` or `1` millisecond
    * `date`: midnight of that day
    * `str`: an ISO 8601 string, or any of the `formats`
        (see [strptime()](https://docs.python.org/3/library/datetime.html#strftime-and-strptime-behavior))
    * `None` and `UNDEFINED` are rejected
    * Anything else is parsed via its string representation

    ```python
    from kanon import CoerceDate

    schema = CoerceDate()
    schema('2014-09-06T21:22:23')  #-> datetime.datetime(2014, 9, 6, 21, 22, 23)
    schema(0)  #-> datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    ```

    :param formats: Format string, or an iterable of formats to try before ISO 8601
    :type formats: str|Iterable[str]|None
    """
    type = 'date'
    expects = 'datetime'
    catalog = 'coerce_date'

    def __init__(self, formats=None, message=None):
        super(CoerceDate, self).__init__(message)
        self.formats = tuple([formats]
                             if isinstance(formats, str) else
                             formats or ())

    def accepts(self, v):
        return isinstance(v, datetime)

    def catalog_key(self, v):
        if v is None:
            return 'coerce_none_date'
        if v is const.UNDEFINED:
            return 'coerce_undefined_date'
        return self.catalog

    def parse(self, v):
        """ Parse a string into a `datetime`

        :type v: str
        :rtype: datetime
        :raises ValueError: Invalid date
        """
        v = v.strip()
        for format in self.formats:
            try:
                return datetime.strptime(v, format)
            except ValueError:
                pass
        if v.endswith(('Z', 'z')):
            v = v[:-1] + '+00:00'
        return datetime.fromisoformat(v)

    def convert(self, v):
        if v is None or v is const.UNDEFINED:
            raise TypeError(v)
        if isinstance(v, bool):
            v = int(v)
        if is_number(v):
            return EPOCH + timedelta(milliseconds=v)
        if isinstance(v, float) and math.isnan(v):
            raise ValueError(v)
        if isinstance(v, date):
            return datetime.combine(v, time())
        if isinstance(v, str):
            return self.parse(v)
        return self.parse(str(v))


__all__ = ('CoerceString', 'CoerceNumber', 'CoerceBoolean', 'CoerceBigInt', 'CoerceDate')
