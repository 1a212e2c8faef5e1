""" Wrappers: schemas that modify exactly one wrapped schema.

```python
from kanon import Object, String, Number, Optional, Default

schema = Object({
    'name': String(),
    'nickname': Optional(String()),
    'age': Default(Number(), 0),
})

schema({'name': 'Alex'})  #-> {'name': 'Alex', 'age': 0}
```
"""

from ..schema import ensure_schema
from ..schema.errors import SchemaError
from ..schema.util import const
from .base import Wrapper


class Optional(Wrapper):
    """ Accept `UNDEFINED` without invoking the wrapped schema.

    In an object, this makes the key optional: a missing key is not written to the output.
    """
    type = 'optional'
    transparent = True

    def __init__(self, schema, message=None):
        super(Optional, self).__init__(schema, message)
        self.expects = '{}?'.format(self.wrapped.expects)

    def wrap(self, run, dataset, config):
        if dataset.value is const.UNDEFINED:
            return dataset.succeed(dataset.value)
        return run(dataset, config)


class Nullable(Wrapper):
    """ Accept `None` without invoking the wrapped schema """
    type = 'nullable'
    transparent = True

    def __init__(self, schema, message=None):
        super(Nullable, self).__init__(schema, message)
        self.expects = '{} | None'.format(self.wrapped.expects)

    def wrap(self, run, dataset, config):
        if dataset.value is None:
            return dataset.succeed(None)
        return run(dataset, config)


class Nullish(Wrapper):
    """ Accept both `UNDEFINED` and `None` without invoking the wrapped schema """
    type = 'nullish'
    transparent = True

    def __init__(self, schema, message=None):
        super(Nullish, self).__init__(schema, message)
        self.expects = '{}? | None'.format(self.wrapped.expects)

    def wrap(self, run, dataset, config):
        if dataset.value is None or dataset.value is const.UNDEFINED:
            return dataset.succeed(dataset.value)
        return run(dataset, config)


class Default(Wrapper):
    """ Replace `UNDEFINED` with a default value.

    Unlike [`Optional`](#optional), the default value is validated by the wrapped schema:

    ```python
    from kanon import Default, MinValue, Number, UNDEFINED

    schema = Default(MinValue(Number(), 1), 0)
    schema(5)  #-> 5
    schema(UNDEFINED)
    #-> ValidationError: Number must be at least 1: expected min_value(1), got 0
    ```

    :param default: The default value, or a callable that creates it.

        A callable is invoked every time a default is needed: use it for mutable defaults.
    """
    type = 'default'
    transparent = True

    def __init__(self, schema, default, message=None):
        super(Default, self).__init__(schema, message)
        self.default = default

    def get_default(self):
        """ Get the default value """
        return self.default() if callable(self.default) else self.default

    def wrap(self, run, dataset, config):
        if dataset.value is const.UNDEFINED:
            dataset.value = self.get_default()
        return run(dataset, config)

    def __repr__(self):
        return '{cls}({0.wrapped!r}, {0.default!r})'.format(self, cls=type(self).__name__)


class Readonly(Wrapper):
    """ Mark the output as read-only. Validation is not affected. """
    type = 'readonly'
    transparent = True

    def wrap(self, run, dataset, config):
        return run(dataset, config)


class Lazy(Wrapper):
    """ Defer the creation of a schema until it's first used.

    This is how recursive schemas are defined:

    ```python
    from kanon import Lazy, Object, Array, String

    node = Object({
        'name': String(),
        'children': Array(Lazy(lambda: node)),
    })

    node({'name': 'root', 'children': [{'name': 'leaf', 'children': []}]})
    ```

    The getter is called once: the schema it returns is kept.
    Exceptions raised by the getter are not caught.

    :param getter: `getter() -> Schema`
    :type getter: callable
    """
    type = 'lazy'
    expects = 'lazy'

    def __init__(self, getter, message=None):
        # Skip Wrapper.__init__(): there's no schema yet
        super(Wrapper, self).__init__(message)
        if not callable(getter):
            raise SchemaError('Lazy requires a callable getter, got {!r}'.format(getter))
        self.getter = getter
        self._wrapped = None

    @property
    def wrapped(self):
        """ The schema created by the getter """
        if self._wrapped is None:
            self._wrapped = ensure_schema(self.getter(), 'Lazy getter result')
        return self._wrapped

    def run(self, dataset, config):
        return self.wrapped.run(dataset, config)

    def __repr__(self):
        return '{cls}({getter})'.format(cls=type(self).__name__, getter=getattr(self.getter, '__name__', self.getter))


__all__ = ('Optional', 'Nullable', 'Nullish', 'Default', 'Readonly', 'Lazy')
