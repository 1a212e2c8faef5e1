from ..schema import Schema, ensure_schema
from ..schema.const import KIND, STATUS
from ..schema.util import get_received


def absorb_issues(dataset, key, child):
    """ Copy the child's issues into the dataset, with `key` prepended to their paths

    :type dataset: Dataset
    :param key: Object key, array index, or map key
    :type child: Dataset
    """
    for issue in child.issues:
        dataset.add_issue(issue.prefixed(key))


def finish(dataset, output, typed):
    """ Finalize a composite dataset after all children have been validated.

    * No issues: `success`, with the rebuilt output
    * Issues, but every child is typed: `partial`, with the rebuilt output
    * Otherwise: `failure`, with the original value

    :type dataset: Dataset
    :param output: The rebuilt output value
    :param typed: Whether all children are typed
    :type typed: bool
    :rtype: Dataset
    """
    if dataset.issues is None:
        return dataset.succeed(output)
    if typed:
        dataset.status = STATUS.PARTIAL
        dataset.value = output
        return dataset
    return dataset.fail()


class Wrapper(Schema):
    """ Base for schemas that wrap exactly one schema.

    :param schema: The wrapped schema
    :type schema: Schema
    """

    #: The fast path may compile the wrapped schema, and pass it to `wrap()`
    transparent = False

    def __init__(self, schema, message=None):
        super(Wrapper, self).__init__(message)
        #: The wrapped schema
        self.wrapped = ensure_schema(schema, 'Wrapped schema')
        self.expects = self.wrapped.expects

    def wrap(self, run, dataset, config):
        """ Validate, with `run(dataset, config)` standing in for the wrapped schema """
        raise NotImplementedError

    def run(self, dataset, config):
        return self.wrap(self.wrapped.run, dataset, config)

    def unwrap(self):
        """ Get the innermost schema, through all wrappers

        :rtype: Schema
        """
        schema = self.wrapped
        while isinstance(schema, Wrapper):
            schema = schema.wrapped
        return schema

    def __repr__(self):
        return '{cls}({0.wrapped!r})'.format(self, cls=type(self).__name__)


class Constraint(Wrapper):
    """ Base for constraint combinators: a wrapped schema + a parameter.

    The wrapped schema runs first, and the constraint is only tested when the value is typed:
    a constraint never runs against an already-invalid value.

    A failed constraint adds one `'validation'` issue and downgrades the dataset to `partial`:
    the value still has the right shape, so the next constraint in the chain will test it too.
    With `abort=True` (or `Config.abort_early`), the dataset fails instead, and the rest of the chain is skipped.

    Subclasses implement `test(value)`, and may override `catalog_key(value)`
    to pick the default message depending on the value type.

    :param schema: The wrapped schema
    :type schema: Schema
    :param requirement: The constraint parameter
    :param message: Custom error message
    :param abort: Fail the dataset (and skip the rest of the constraints) when this constraint fails
    :type abort: bool
    """

    #: Issue type. Must be overridden in subclasses
    type = None
    transparent = True

    def __init__(self, schema, requirement=None, message=None, abort=False):
        super(Constraint, self).__init__(schema, message)
        self.requirement = requirement
        self.abort = abort

        #: Description of the constraint: used as `Issue.expects`
        self.name = self.type if requirement is None else '{type}({requirement!r})'.format(type=self.type, requirement=requirement)

    def test(self, value):
        """ Test the value

        :return: Whether the value satisfies the constraint
        :rtype: bool
        """
        raise NotImplementedError

    def catalog_key(self, value):
        """ Default message catalog key for the failing value """
        return self.type

    def received(self, value):
        """ `Issue.received` for the failing value """
        return get_received(value)

    def wrap(self, run, dataset, config):
        dataset = run(dataset, config)
        if not dataset.typed:
            return dataset

        value = dataset.value
        if self.test(value):
            return dataset

        dataset.add_issue(self.issue(
            dataset, config,
            kind=KIND.VALIDATION,
            expects=self.name,
            received=self.received(value),
            requirement=self.requirement,
            catalog=self.catalog_key(value)))
        if self.abort or config.abort_early:
            return dataset.fail()
        dataset.status = STATUS.PARTIAL
        return dataset

    def __repr__(self):
        return '{cls}({0.wrapped!r}, {0.requirement!r})'.format(self, cls=type(self).__name__)
