from collections import namedtuple

from .const import KIND, STATUS
from .dataset import Dataset, Config
from .errors import Issue, SchemaError
from .messages import default_message
from .util import Sentinel, get_received


_missing = Sentinel('missing')


class Coerced(namedtuple('Coerced', ('value',))):
    """ Coercion signal: the value is valid, but must be replaced with `value` """
    __slots__ = ()


class Schema(object):
    """ Validation schema: an immutable description of an expected value plus its validator.

    Every schema implements a single operation: `run(dataset, config)`.
    It takes a [`Dataset`](#dataset) and returns the same dataset, either upgraded to `success`
    (possibly with a rewritten value), or marked as `partial`/`failure` with the issues appended.

    A schema never raises on bad user data: all problems are reported as [`Issue`](#issue)s.
    Exceptions are only raised for programmer errors, e.g. a malformed schema.

    Schemas are built once and are treated as immutable: validation never changes a schema,
    so one schema object can be shared by any number of concurrent validations.

    Once a schema is defined, validation can be triggered by calling it:

    ```python
    from kanon import Object, String, Number

    schema = Object({'name': String(), 'age': Number()})

    schema({'name': 'Alex', 'age': 18})  #-> {'name': 'Alex', 'age': 18}
    schema({'name': 'Alex'})
    #-> ValidationError: Expected number @ ['age']: expected number, got undefined
    ```

    For a result-returning variant that never raises, see [`parse()`](#parse).

    Every schema accepts a `message` argument: a string, or a callable that receives
    the [`Issue`](#issue) and returns a string. It overrides the default message for
    all the issues the schema itself reports (but not the ones reported by its children).

    :param message: Custom error message
    :type message: str|callable|None
    """

    #: Always 'schema'
    kind = 'schema'

    #: Schema type discriminant. Must be overridden in subclasses
    type = None

    #: Human-readable description of the expected value
    expects = '???'

    #: Synchronous core: there are no async schemas
    is_async = False

    def __init__(self, message=None):
        assert message is None or isinstance(message, str) or callable(message), \
            '`message` must be a string or a callable'
        self.message = message

    def run(self, dataset, config):
        """ Validate the dataset

        :param dataset: The dataset to validate
        :type dataset: Dataset
        :param config: Call config
        :type config: Config
        :return: The same dataset
        :rtype: Dataset
        """
        raise NotImplementedError

    def __call__(self, value, config=None):
        """ Validate the value, and return the sanitized value.

        :param value: Input value to validate
        :param config: Call config
        :type config: Config|dict|None
        :return: Sanitized value
        :raises ValidationError: Invalid input
        """
        return default_engine.validate(self, value, config)

    def check(self, value, config):
        """ Validate a single value and get the coercion signal.

        Used by composites that want a plain answer per entry:

        * `True`: the value is valid as is
        * `str`: an error message: the value is invalid
        * `Coerced(value)`: the value is valid, but must be replaced with `Coerced.value`

        :param value: Input value to validate
        :type config: Config
        :rtype: bool|str|Coerced
        """
        dataset = self.run(Dataset(value), config)
        if dataset.status == STATUS.SUCCESS:
            if dataset.value is value:
                return True
            return Coerced(dataset.value)
        return dataset.issues[0].message

    def issue(self, dataset, config, kind=KIND.SCHEMA, type=None, expects=None, received=None,
              requirement=None, catalog=None, input=_missing, message=None, issues=None):
        """ Create an issue reported by this schema.

        The message is resolved in the following order: `message` argument, the schema's message,
        `config.message`, the default catalog message.

        Typical use:

        ```python
        return dataset.fail(self.issue(dataset, config, received=get_received(dataset.value)))
        ```

        :param dataset: The dataset being validated
        :type dataset: Dataset
        :param config: Call config
        :type config: Config
        :param kind: Issue kind
        :param type: Issue type. Defaults to the schema's type
        :param expects: Expected value description. Defaults to the schema's `expects`
        :param received: Received value tag. Defaults to the type of the input
        :param requirement: Constraint parameter
        :param catalog: Default catalog key. Defaults to the issue type
        :param input: The input value. Defaults to `dataset.value`
        :param message: Message override
        :param issues: Nested issues
        :rtype: Issue
        """
        type = type or self.type
        expects = self.expects if expects is None else expects
        value = dataset.value if input is _missing else input
        received = get_received(value) if received is None else received

        issue = Issue(kind, type, value, expects, received,
                      default_message(catalog or type, config.lang, expects, received, requirement),
                      (), requirement, issues)

        # Custom messages
        custom = message or self.message or config.message
        if custom is not None:
            issue = issue._replace(message=custom(issue) if callable(custom) else custom)
        return issue

    def __repr__(self):
        return '{cls}({expects})'.format(cls=type(self).__name__, expects=self.expects)

    def __str__(self):
        return self.expects


def ensure_schema(v, what='schema'):
    """ Ensure that the value is a schema, or fail with a SchemaError

    :param v: The value to test
    :param what: What it is, for the error message
    :type what: str
    :rtype: Schema
    :raises SchemaError: not a schema
    """
    if not isinstance(v, Schema):
        raise SchemaError('{what} must be a Schema, got {type}'.format(what=what, type=type(v).__name__))
    return v


from .engine import Engine, default_engine, parse, parse_bulk, validate
