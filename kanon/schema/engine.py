""" Validation engine: the entry points that turn a final dataset into a public result.

An `Engine` owns the process-wide state: the fast-path compiler cache.
Most applications just use the module-level functions, which are backed by `default_engine`:

```python
from kanon import Object, String, parse, parse_bulk

schema = Object({'name': String()})

parse(schema, {'name': 'Alex'})  #-> Result(success=True, data={'name': 'Alex'})
parse_bulk(schema, [{'name': 'Alex'}, {}])  #-> [Result(success=True, ...), Result(success=False, ...)]
```

Isolated engines are useful in tests, or when a set of schemas is short-lived:

```python
from kanon.schema.engine import Engine

engine = Engine(fast_path=False)
engine.parse(schema, {'name': 'Alex'})
```
"""

from .compiler import FastPathCompiler
from .dataset import Dataset, Config, Result


class Engine(object):
    """ Validation engine

    :param fast_path: Use the fast-path compiler for object schemas
    :type fast_path: bool
    :param compiler: Compiler to use. A fresh one is created when not provided
    :type compiler: FastPathCompiler|None
    """

    def __init__(self, fast_path=True, compiler=None):
        self.fast_path = fast_path
        self.compiler = compiler if compiler is not None else FastPathCompiler()

    def run(self, schema, value, config=None):
        """ Validate a value and return the final dataset

        :type schema: Schema
        :param value: Input value
        :type config: Config|dict|None
        :rtype: Dataset
        """
        config = Config.make(config)
        dataset = Dataset(value)
        if self.fast_path:
            return self.compiler.get(schema).run(dataset, config)
        return schema.run(dataset, config)

    def parse(self, schema, value, config=None):
        """ Validate a value, and return the result without raising

        :type schema: Schema
        :param value: Input value
        :type config: Config|dict|None
        :rtype: Result
        """
        return Result.from_dataset(self.run(schema, value, config))

    def parse_bulk(self, schema, values, config=None):
        """ Validate every value independently.

        Each value gets its own dataset: a failure on one input never affects the result of another.

        :type schema: Schema
        :param values: Input values
        :type values: iterable
        :type config: Config|dict|None
        :rtype: list[Result]
        """
        config = Config.make(config)
        return [self.parse(schema, value, config) for value in values]

    def validate(self, schema, value, config=None):
        """ Validate a value and return the sanitized value, or raise

        :type schema: Schema
        :param value: Input value
        :type config: Config|dict|None
        :return: Sanitized value
        :raises ValidationError: Invalid input
        """
        return self.parse(schema, value, config).unwrap()

    def __repr__(self):
        return '{cls}(fast_path={0.fast_path!r})'.format(self, cls=type(self).__name__)


#: The engine behind the module-level functions
default_engine = Engine()


def parse(schema, value, config=None):
    """ Validate a value with the default engine, and return the result

    :type schema: Schema
    :param value: Input value
    :param config: Call config: `Config`, a dict of its fields, or `None`
    :type config: Config|dict|None
    :rtype: Result
    """
    return default_engine.parse(schema, value, config)


def parse_bulk(schema, values, config=None):
    """ Validate every value independently with the default engine

    :rtype: list[Result]
    """
    return default_engine.parse_bulk(schema, values, config)


def validate(schema, value, config=None):
    """ Validate a value with the default engine, and return the sanitized value

    :raises ValidationError: Invalid input
    """
    return default_engine.validate(schema, value, config)
