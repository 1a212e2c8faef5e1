""" Container schemas: arrays, tuples, records, maps and sets.

Every container verifies the structural type first, and only then descends into the items.
Issues reported by the items get the item's index (or key) prepended to their paths:

```python
from kanon import Array, Number

schema = Array(Number())
schema([1, 2, 3])  #-> [1, 2, 3]
schema([1, 'x', 3])
#-> ValidationError: Expected number @ [1]: expected number, got str
```
"""

from collections.abc import Mapping

from ..schema import Schema, Coerced, ensure_schema
from ..schema.const import KIND
from ..schema.dataset import Dataset
from ..schema.errors import SchemaError
from ..schema.util import get_received
from .base import absorb_issues, finish
from .types import AnyValue


def ensure_size(value, what):
    """ Ensure that the size limit is `None` or a non-negative integer

    :raises SchemaError: invalid limit
    """
    if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
        raise SchemaError('{} must be a non-negative integer, got {!r}'.format(what, value))
    return value


class Container(Schema):
    """ Base for containers with optional size limits.

    The limits are checked before any per-item work: an oversized input is rejected right away.

    :param min_size: Minimal size, or `None`
    :param max_size: Maximal size, or `None`
    """

    #: Catalog prefix for size issues
    size_catalog = None

    def __init__(self, min_size=None, max_size=None, message=None):
        super(Container, self).__init__(message)
        self.min_size = ensure_size(min_size, 'Minimal size')
        self.max_size = ensure_size(max_size, 'Maximal size')

    def size_issue(self, dataset, config):
        """ Test the size of the container

        :return: The issue, or `None` when the size is fine
        :rtype: Issue|None
        """
        size = len(dataset.value)
        if self.min_size is not None and size < self.min_size:
            type, requirement = 'min_length', self.min_size
        elif self.max_size is not None and size > self.max_size:
            type, requirement = 'max_length', self.max_size
        else:
            return None
        return self.issue(
            dataset, config,
            kind=KIND.VALIDATION,
            type=type,
            expects='{}({})'.format(type, requirement),
            received=str(size),
            requirement=requirement,
            catalog='{}_{}'.format(self.size_catalog, type))

    def run_items(self, dataset, config, items):
        """ Validate (key, value, schema) items

        :return: (output list, typed), or `None` when aborted
        """
        output = []
        typed = True
        for key, value, schema in items:
            child = schema.run(Dataset(value), config)
            if child.issues is not None:
                absorb_issues(dataset, key, child)
                if config.abort_early:
                    return None
            if child.typed:
                output.append(child.value)
            else:
                typed = False
        return output, typed


class Array(Container):
    """ Validate a `list`, with every item matching the `item` schema.

    :param item: Schema for the items
    :type item: Schema
    :param min_length: Minimal length
    :param max_length: Maximal length
    """
    type = 'array'
    size_catalog = 'array'

    def __init__(self, item, min_length=None, max_length=None, message=None):
        super(Array, self).__init__(min_length, max_length, message)
        self.item = ensure_schema(item, 'Array item schema')
        self.expects = 'list[{}]'.format(self.item.expects)

    def run(self, dataset, config):
        value = dataset.value
        if not isinstance(value, list):
            return dataset.fail(self.issue(dataset, config))

        issue = self.size_issue(dataset, config)
        if issue is not None:
            return dataset.fail(issue)

        item = self.item
        result = self.run_items(dataset, config, ((i, v, item) for i, v in enumerate(value)))
        if result is None:
            return dataset.fail()
        return finish(dataset, *result)

    def __repr__(self):
        return '{cls}({0.item!r})'.format(self, cls=type(self).__name__)


class Tuple(Schema):
    """ Validate a fixed-length sequence with a schema per position.

    Both lists and tuples are accepted; the output is a `tuple`.

    With a `rest` schema, the sequence may be longer: the extra items are validated against `rest`.

    ```python
    from kanon import Tuple, String, Number

    schema = Tuple([String(), Number()])
    schema(['a', 1])  #-> ('a', 1)
    schema(['a'])
    #-> ValidationError: Expected tuple of length 2, got 1: expected tuple[str, number], got 1
    ```

    :param items: Schemas for each position
    :type items: Iterable[Schema]
    :param rest: Schema for the items past the fixed positions
    :type rest: Schema|None
    """
    type = 'tuple'

    def __init__(self, items, rest=None, message=None):
        super(Tuple, self).__init__(message)
        self.items = tuple(ensure_schema(s, 'Tuple item schema') for s in items)
        self.rest = None if rest is None else ensure_schema(rest, 'Tuple rest schema')
        self.expects = 'tuple[{}{}]'.format(
            ', '.join(s.expects for s in self.items),
            '' if self.rest is None else ', *{}'.format(self.rest.expects))

    def run(self, dataset, config):
        value = dataset.value
        if not isinstance(value, (list, tuple)):
            return dataset.fail(self.issue(dataset, config))

        # Length
        n = len(self.items)
        if self.rest is None and len(value) != n:
            return dataset.fail(self.issue(dataset, config, requirement=n, catalog='tuple_length',
                                           received=str(len(value))))
        if self.rest is not None and len(value) < n:
            return dataset.fail(self.issue(dataset, config, requirement=n, catalog='tuple_min_length',
                                           received=str(len(value))))

        output = []
        typed = True
        for i, v in enumerate(value):
            schema = self.items[i] if i < n else self.rest
            child = schema.run(Dataset(v), config)
            if child.issues is not None:
                absorb_issues(dataset, i, child)
                if config.abort_early:
                    return dataset.fail()
            if child.typed:
                output.append(child.value)
            else:
                typed = False
        return finish(dataset, tuple(output), typed)


class KeyValueContainer(Container):
    """ Base for containers that validate both keys and values.

    An invalid key or value is reported as one issue at the entry's path: "Key: <reason>" or "Value: <reason>".
    """

    def __init__(self, key, value, min_size=None, max_size=None, message=None):
        super(KeyValueContainer, self).__init__(min_size, max_size, message)
        self.key = ensure_schema(key, 'Key schema')
        self.value = ensure_schema(value, 'Value schema')

    def entry_issue(self, dataset, config, catalog, key, input, schema, reason):
        """ Issue: invalid key or value """
        return self.issue(
            dataset, config,
            expects=schema.expects,
            received=get_received(input),
            requirement=reason,
            catalog=catalog,
            input=input,
        ).prefixed(key)


class CopyOnWrite(object):
    """ A mapping that's borrowed from the input until the first write.

    On the first write, the mapping is copied into an owned `dict`, and the input is never touched.

    :param borrowed: The input mapping
    :type borrowed: Mapping
    """

    __slots__ = ('value', 'owned')

    def __init__(self, borrowed):
        self.value = borrowed
        self.owned = False

    def own(self):
        """ Get a writable mapping, copying the borrowed one on first use

        :rtype: dict
        """
        if not self.owned:
            self.value = dict(self.value)
            self.owned = True
        return self.value

    def replace(self, key, new_key, new_value):
        """ Replace an entry: possibly under a different key.

        An equal key of the same type keeps its position.
        """
        owned = self.own()
        if not (type(new_key) is type(key) and new_key == key):
            del owned[key]
        owned[new_key] = new_value


class Map(KeyValueContainer):
    """ Validate a mapping as a set of [key, value] pairs.

    Unlike [`Record`](#record), the input mapping is returned as is, unless some keys or values were coerced:
    then it's copied on the first coercion, and the copy is returned.

    ```python
    from kanon import Map, CoerceNumber, String

    schema = Map(CoerceNumber(), String())
    value = {1: 'a'}
    schema(value) is value  #-> True
    schema({'1': 'a'})  #-> {1: 'a'}
    ```

    :param key: Schema for the keys
    :param value: Schema for the values
    :param min_size: Minimal number of entries
    :param max_size: Maximal number of entries
    """
    type = 'map'
    size_catalog = 'map'

    def __init__(self, key, value, min_size=None, max_size=None, message=None):
        super(Map, self).__init__(key, value, min_size, max_size, message)
        self.expects = 'Mapping[{}, {}]'.format(self.key.expects, self.value.expects)

    def run(self, dataset, config):
        value = dataset.value
        if not isinstance(value, Mapping):
            return dataset.fail(self.issue(dataset, config))

        issue = self.size_issue(dataset, config)
        if issue is not None:
            return dataset.fail(issue)

        output = CopyOnWrite(value)
        for k, v in list(value.items()):
            key_signal = self.key.check(k, config)
            if key_signal is not True and not isinstance(key_signal, Coerced):
                dataset.add_issue(self.entry_issue(dataset, config, 'map_key', k, k, self.key, key_signal))
                if config.abort_early:
                    return dataset.fail()
                continue

            value_signal = self.value.check(v, config)
            if value_signal is not True and not isinstance(value_signal, Coerced):
                dataset.add_issue(self.entry_issue(dataset, config, 'map_value', k, v, self.value, value_signal))
                if config.abort_early:
                    return dataset.fail()
                continue

            # Coerced: write under the final key, once
            if key_signal is not True or value_signal is not True:
                output.replace(
                    k,
                    k if key_signal is True else key_signal.value,
                    v if value_signal is True else value_signal.value)

        if dataset.issues is not None:
            return dataset.fail()
        return dataset.succeed(output.value)

    def __repr__(self):
        return '{cls}({0.key!r}, {0.value!r})'.format(self, cls=type(self).__name__)


class Record(KeyValueContainer):
    """ Validate a mapping with an open set of keys and a uniform value schema.

    The output is always a new `dict`.

    ```python
    from kanon import Record, Number

    schema = Record(Number())
    schema({'a': 1, 'b': 2})  #-> {'a': 1, 'b': 2}
    schema({'a': 'x'})
    #-> ValidationError: Expected number @ ['a']: expected number, got str
    ```

    :param value: Schema for the values
    :type value: Schema
    :param key_schema: Schema for the keys. Any key is accepted by default
    :type key_schema: Schema|None
    """
    type = 'record'

    def __init__(self, value, key_schema=None, message=None):
        if key_schema is None:
            key_schema = AnyValue()
        super(Record, self).__init__(key_schema, value, message=message)
        self.expects = 'dict[{}, {}]'.format(self.key.expects, self.value.expects)

    def run(self, dataset, config):
        value = dataset.value
        if not isinstance(value, Mapping):
            return dataset.fail(self.issue(dataset, config))

        output = {}
        typed = True
        for k, v in value.items():
            # Key
            key_signal = self.key.check(k, config)
            if key_signal is not True and not isinstance(key_signal, Coerced):
                dataset.add_issue(self.entry_issue(dataset, config, 'map_key', k, k, self.key, key_signal))
                if config.abort_early:
                    return dataset.fail()
                typed = False
                continue
            new_key = k if key_signal is True else key_signal.value

            # Value
            child = self.value.run(Dataset(v), config)
            if child.issues is not None:
                absorb_issues(dataset, k, child)
                if config.abort_early:
                    return dataset.fail()
            if child.typed:
                output[new_key] = child.value
            else:
                typed = False
        return finish(dataset, output, typed)

    def __repr__(self):
        return '{cls}({0.value!r})'.format(self, cls=type(self).__name__)


class Set(Container):
    """ Validate a `set` or a `frozenset`, with every item matching the `item` schema.

    The output has the same type as the input. Item issues have the item itself as the path key.

    :param item: Schema for the items
    :type item: Schema
    :param min_size: Minimal size
    :param max_size: Maximal size
    """
    type = 'set'
    size_catalog = 'set'

    def __init__(self, item, min_size=None, max_size=None, message=None):
        super(Set, self).__init__(min_size, max_size, message)
        self.item = ensure_schema(item, 'Set item schema')
        self.expects = 'set[{}]'.format(self.item.expects)

    def run(self, dataset, config):
        value = dataset.value
        if not isinstance(value, (set, frozenset)):
            return dataset.fail(self.issue(dataset, config))

        issue = self.size_issue(dataset, config)
        if issue is not None:
            return dataset.fail(issue)

        item = self.item
        result = self.run_items(dataset, config, ((v, v, item) for v in value))
        if result is None:
            return dataset.fail()
        output, typed = result
        return finish(dataset, frozenset(output) if isinstance(value, frozenset) else set(output), typed)

    def __repr__(self):
        return '{cls}({0.item!r})'.format(self, cls=type(self).__name__)


__all__ = ('Array', 'Tuple', 'Record', 'Map', 'Set')
