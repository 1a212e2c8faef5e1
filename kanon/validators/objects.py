""" Object schemas: a fixed set of declared keys, each with its own schema.

The input is any `Mapping`; the output is always a fresh `dict` with the declared keys, in declaration order.

Three flavors differ in how they treat extra keys (keys not declared in the schema):

* [`Object`](#object) drops them from the output
* [`LooseObject`](#looseobject) passes them through verbatim, without validation
* [`StrictObject`](#strictobject) reports every one of them as an issue

```python
from kanon import Object, StrictObject, String, Number

schema = Object({'name': String(), 'age': Number()})
schema({'name': 'Alex', 'age': 18, 'admin': True})  #-> {'name': 'Alex', 'age': 18}

schema = StrictObject({'name': String()})
schema({'name': 'Alex', 'admin': True})
#-> ValidationError: Object must not contain unexpected property: admin @ ['admin']: expected never, got bool
```

A key absent from the input is validated as [`UNDEFINED`](#undefined): it's up to the key's schema to decide
whether this is fine. Wrap it with [`Optional`](#optional) or [`Default`](#default) to make the key optional.
Keys whose final value is `UNDEFINED` are not written to the output.
"""

from collections.abc import Mapping

from ..schema import Schema, ensure_schema
from ..schema.const import EXTRA, ABSENT
from ..schema.dataset import Dataset
from ..schema.errors import SchemaError
from ..schema.util import const, get_received
from .base import absorb_issues, finish


class Object(Schema):
    """ Validate a mapping with a fixed set of declared keys.

    :param entries: Mapping of keys to their schemas
    :type entries: Mapping
    :param message: Custom error message
    :param extra: Behavior for extra keys: one of `EXTRA.*`. Defaults to the class' own behavior
    :type extra: str|None
    :param absent: Behavior for declared keys that are missing from the input: one of `ABSENT.*`
    :type absent: str
    """
    type = 'object'
    expects = 'Mapping'

    #: Default behavior for extra keys
    extra = EXTRA.STRIP

    def __init__(self, entries, message=None, extra=None, absent=ABSENT.VALIDATE):
        super(Object, self).__init__(message)
        if not isinstance(entries, Mapping):
            raise SchemaError('Object entries must be a Mapping, got {}'.format(type(entries).__name__))
        if extra is not None:
            if extra not in (EXTRA.STRIP, EXTRA.LOOSE, EXTRA.STRICT):
                raise SchemaError('Unsupported extra keys behavior: {!r}'.format(extra))
            self.extra = extra
        if absent not in (ABSENT.VALIDATE, ABSENT.SKIP, ABSENT.REJECT):
            raise SchemaError('Unsupported absent keys behavior: {!r}'.format(absent))

        #: Declared keys and their schemas
        self.entries = {key: ensure_schema(schema, 'Schema for key {!r}'.format(key))
                        for key, schema in entries.items()}
        self.absent = absent

    def derive(self, entries, absent=None):
        """ Create an object schema of the same flavor with different entries

        :type entries: Mapping
        :param absent: Behavior for the missing keys. Defaults to the current one
        :rtype: Object
        """
        return type(self)(entries, message=self.message, extra=self.extra,
                          absent=self.absent if absent is None else absent)

    def type_issue(self, dataset, config):
        """ Issue: the input is not a mapping """
        return self.issue(dataset, config)

    def missing_issue(self, dataset, key, config):
        """ Issue: a declared key is missing """
        return self.issue(
            dataset, config,
            type='required',
            expects=self.entries[key].expects,
            received=get_received(const.UNDEFINED),
            requirement=key,
            input=const.UNDEFINED,
        ).prefixed(key)

    def extra_issue(self, dataset, key, config):
        """ Issue: an extra key in a strict object """
        value = dataset.value[key]
        return self.issue(
            dataset, config,
            type='strict_object',
            expects='never',
            received=get_received(value),
            requirement=key,
            input=value,
        ).prefixed(key)

    def run(self, dataset, config):
        value = dataset.value
        if not isinstance(value, Mapping):
            return dataset.fail(self.type_issue(dataset, config))

        output = {}
        typed = True

        # Declared keys
        for key, schema in self.entries.items():
            if key in value:
                child = schema.run(Dataset(value[key]), config)
            elif self.absent == ABSENT.SKIP:
                continue
            elif self.absent == ABSENT.REJECT:
                dataset.add_issue(self.missing_issue(dataset, key, config))
                if config.abort_early:
                    return dataset.fail()
                typed = False
                continue
            else:
                child = schema.run(Dataset(const.UNDEFINED), config)

            if child.issues is not None:
                absorb_issues(dataset, key, child)
                if config.abort_early:
                    return dataset.fail()
            if child.typed:
                if child.value is not const.UNDEFINED:
                    output[key] = child.value
            else:
                typed = False

        # Extra keys
        if self.extra != EXTRA.STRIP:
            for key in value:
                if key in self.entries:
                    continue
                if self.extra == EXTRA.LOOSE:
                    output[key] = value[key]
                else:
                    dataset.add_issue(self.extra_issue(dataset, key, config))
                    if config.abort_early:
                        return dataset.fail()
                    typed = False

        return finish(dataset, output, typed)

    def __repr__(self):
        return '{cls}({entries})'.format(
            cls=type(self).__name__,
            entries='{' + ', '.join('{!r}: {!r}'.format(k, v) for k, v in self.entries.items()) + '}')


class StrictObject(Object):
    """ Object that reports every extra key as an issue """
    extra = EXTRA.STRICT


class LooseObject(Object):
    """ Object that passes extra keys through verbatim """
    extra = EXTRA.LOOSE


__all__ = ('Object', 'StrictObject', 'LooseObject')
