from collections.abc import Mapping

from ..schema import Schema, ensure_schema
from ..schema.const import STATUS
from ..schema.dataset import Dataset
from ..schema.errors import SchemaError
from ..schema.util import get_callable_name
from .base import Wrapper, Constraint
from .values import strict_equal


class Operator(Schema):
    """ Base for operators over 2..N sibling schemas

    :param schemas: Member schemas
    """

    #: Join string for `expects`
    joiner = None

    def __init__(self, *schemas, message=None):
        super(Operator, self).__init__(message)
        if len(schemas) < 2:
            raise SchemaError('{} requires at least two schemas, got {}'.format(type(self).__name__, len(schemas)))

        # Flatten nested operators of the same type (for the sake of friendlier error messages)
        schemas = sum(tuple(s.schemas if type(s) == type(self) and s.message is None else (s,)
                            for s in schemas), ())

        #: Member schemas
        self.schemas = tuple(ensure_schema(s, '{} member'.format(type(self).__name__)) for s in schemas)
        self.expects = self.joiner.join(s.expects for s in self.schemas)

    def __repr__(self):
        return '{cls}({schemas})'.format(cls=type(self).__name__, schemas=', '.join(map(repr, self.schemas)))


class Union(Operator):
    """ Try the provided schemas in order and use the first one that succeeds.

    This is the *OR* condition: any of the schemas should match.
    Ties are resolved strictly by declaration order: there's no "best match" heuristic.

    ```python
    from kanon import Union, String, Number

    schema = Union(String(), Number())
    schema('5')  #-> '5'
    schema(5)  #-> 5
    schema(None)
    #-> ValidationError: Value does not match any of the expected types: expected str | number, got None
    ```

    When no member succeeds, one issue is reported, with the reasons of every member in `Issue.issues`:
    even when some member got the type right and failed on a constraint.

    :param schemas: Member schemas
    """
    type = 'union'
    joiner = ' | '

    def run(self, dataset, config):
        value = dataset.value
        issues = []

        for schema in self.schemas:
            member = schema.run(Dataset(value), config)
            if member.status == STATUS.SUCCESS:
                return dataset.succeed(member.value)
            issues.extend(member.issues)

        return dataset.fail(self.issue(dataset, config, issues=tuple(issues)))


def merge(a, b):
    """ Merge two intersection outputs.

    Mappings are merged key by key, with `b` winning collisions; everything else must be equal.

    :return: (ok, merged)
    :rtype: (bool, *)
    """
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        merged = dict(a)
        merged.update(b)
        return True, merged
    if strict_equal(a, b):
        return True, a
    return False, None


class Intersection(Operator):
    """ Value must pass all the schemas independently.

    This is the *AND* condition. Every member validates the original input, and then the outputs are merged:
    mappings are merged with the right-most member winning key collisions, and other values must agree.

    ```python
    from kanon import Intersection, LooseObject, String, Number

    schema = Intersection(
        LooseObject({'name': String()}),
        LooseObject({'age': Number()}),
    )
    schema({'name': 'Alex', 'age': 18})  #-> {'name': 'Alex', 'age': 18}
    ```

    :param schemas: Member schemas
    """
    type = 'intersection'
    joiner = ' & '

    def run(self, dataset, config):
        value = dataset.value
        outputs = []
        typed = True

        for schema in self.schemas:
            member = schema.run(Dataset(value), config)
            if member.issues is not None:
                for issue in member.issues:
                    dataset.add_issue(issue)
                if config.abort_early:
                    return dataset.fail()
            if member.typed:
                outputs.append(member.value)
            else:
                typed = False

        if not typed:
            return dataset.fail()

        # Merge
        output = outputs[0]
        for other in outputs[1:]:
            ok, output = merge(output, other)
            if not ok:
                return dataset.fail(self.issue(dataset, config))

        if dataset.issues is None:
            return dataset.succeed(output)
        dataset.status = STATUS.PARTIAL
        dataset.value = output
        return dataset


class Refine(Constraint):
    """ Validate the value with a custom predicate.

    The predicate receives the value once the wrapped schema has accepted it, and returns whether it's valid.

    ```python
    from kanon import Refine, Number

    schema = Refine(Number(), lambda v: v % 2 == 0, 'Must be even')
    schema(2)  #-> 2
    schema(3)
    #-> ValidationError: Must be even: expected refine(<lambda>()), got 3
    ```

    A failed refinement does not stop the refinements that wrap it, unless `abort=True`:

    ```python
    schema = Refine(
        Refine(String(), lambda v: len(v) > 0, 'Empty', abort=True),
        lambda v: v[0].isupper(), 'Not capitalized')
    ```

    Exceptions raised by the predicate are not caught.

    :param predicate: `predicate(value) -> bool`
    :type predicate: callable
    """
    type = 'refine'

    def __init__(self, schema, predicate, message=None, abort=False):
        if not callable(predicate):
            raise SchemaError('Refine requires a callable predicate, got {!r}'.format(predicate))
        super(Refine, self).__init__(schema, predicate, message, abort)
        self.name = '{type}({name})'.format(type=self.type, name=get_callable_name(predicate))

    def received(self, value):
        return repr(value)

    def test(self, value):
        return bool(self.requirement(value))

    def __repr__(self):
        return '{cls}({0.wrapped!r}, {name})'.format(self, cls=type(self).__name__,
                                                      name=get_callable_name(self.requirement))


class Overwrite(Wrapper):
    """ Transform the value once the wrapped schema has succeeded.

    The transform can't fail: it's only applied to valid values, and exceptions it raises are not caught.

    ```python
    from kanon import Overwrite, String

    schema = Overwrite(String(), str.strip)
    schema('  a  ')  #-> 'a'
    ```

    :param transform: `transform(value) -> value`
    :type transform: callable
    """
    type = 'overwrite'

    def __init__(self, schema, transform, message=None):
        super(Overwrite, self).__init__(schema, message)
        if not callable(transform):
            raise SchemaError('Overwrite requires a callable transform, got {!r}'.format(transform))
        self.transform = transform

    def run(self, dataset, config):
        dataset = self.wrapped.run(dataset, config)
        if dataset.status == STATUS.SUCCESS:
            dataset.value = self.transform(dataset.value)
        return dataset


__all__ = ('Union', 'Intersection', 'Refine', 'Overwrite')
