""" Transforms: derive new object schemas from the entries of an existing one.

The source schema is never modified: every transform creates a new schema
that shares the entry schemas with the source.

```python
from kanon import Object, String, Number, Partial, Pick

user = Object({'name': String(), 'age': Number()})

Partial(user)({})  #-> {}
Pick(user, ['name'])({'name': 'Alex', 'age': 18})  #-> {'name': 'Alex'}
```
"""

from ..schema.const import ABSENT
from ..schema.errors import SchemaError
from .objects import Object
from .values import Enum


def ensure_object(schema, what):
    """ Ensure that the schema is an object schema

    :raises SchemaError: not an object schema
    """
    if not isinstance(schema, Object):
        raise SchemaError('{} requires an object schema, got {!r}'.format(what, schema))
    return schema


def ensure_keys(schema, keys, what):
    """ Ensure that all the keys are declared in the object schema

    :rtype: frozenset
    :raises SchemaError: unknown key
    """
    keys = frozenset(keys)
    unknown = keys - set(schema.entries)
    if unknown:
        raise SchemaError('{} got unknown keys: {}'.format(what, ', '.join(sorted(map(repr, unknown)))))
    return keys


def Partial(schema):
    """ Make every key optional: missing keys are skipped, and not validated at all.

    :param schema: Object schema
    :type schema: Object
    :rtype: Object
    """
    ensure_object(schema, 'Partial')
    return schema.derive(schema.entries, absent=ABSENT.SKIP)


def Required(schema):
    """ Make every key required: missing keys are reported, even if their schemas accept `UNDEFINED`.

    ```python
    from kanon import Object, Optional, String, Required

    schema = Required(Object({'name': Optional(String())}))
    schema({})
    #-> ValidationError: Missing required field: name @ ['name']: expected str?, got undefined
    ```

    :param schema: Object schema
    :type schema: Object
    :rtype: Object
    """
    ensure_object(schema, 'Required')
    return schema.derive(schema.entries, absent=ABSENT.REJECT)


def Pick(schema, keys):
    """ Keep only the given keys

    :param schema: Object schema
    :type schema: Object
    :param keys: Keys to keep
    :type keys: Iterable
    :rtype: Object
    """
    ensure_object(schema, 'Pick')
    keys = ensure_keys(schema, keys, 'Pick')
    return schema.derive({k: v for k, v in schema.entries.items() if k in keys})


def Omit(schema, keys):
    """ Drop the given keys

    :param schema: Object schema
    :type schema: Object
    :param keys: Keys to drop
    :type keys: Iterable
    :rtype: Object
    """
    ensure_object(schema, 'Omit')
    keys = ensure_keys(schema, keys, 'Omit')
    return schema.derive({k: v for k, v in schema.entries.items() if k not in keys})


class KeyOf(Enum):
    """ Validate that the value is one of the keys declared by the object schema

    ```python
    from kanon import Object, String, Number, KeyOf

    schema = KeyOf(Object({'name': String(), 'age': Number()}))
    schema('name')  #-> 'name'
    schema('email')
    #-> ValidationError: Expected one of: 'name', 'age': expected 'name', 'age', got str
    ```

    :param schema: Object schema
    :type schema: Object
    """
    type = 'keyof'

    def __init__(self, schema, message=None):
        ensure_object(schema, 'KeyOf')
        super(KeyOf, self).__init__(schema.entries, message)


__all__ = ('Partial', 'Required', 'Pick', 'Omit', 'KeyOf')
