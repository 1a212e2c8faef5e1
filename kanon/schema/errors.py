"""
Source: [kanon/schema/errors.py](kanon/schema/errors.py)

When validating user input, a schema never raises on bad data: every problem becomes an [`Issue`](#issue)
which is collected along the way, so you can report *all* of them at once.

An issue is one of two kinds:

* `'schema'`: the value has the wrong fundamental type or shape (e.g. a `str` where a `list` was expected)
* `'validation'`: the shape is right, but a constraint has failed (e.g. the string is too short)

Exception-style callers get a single aggregate [`ValidationError`](#validationerror) carrying all the issues.
[`SchemaError`](#schemaerror) is reserved for programmer errors: a malformed schema.

All errors are available right at the top-level:

```python
from kanon import Issue, ValidationError, SchemaError
```
"""

from collections import namedtuple


class BaseError(Exception):
    """ Base kanon exception """


class SchemaError(BaseError):
    """ Schema error (e.g. malformed) """


class Issue(namedtuple('Issue', ('kind', 'type', 'input', 'expects', 'received', 'message', 'path', 'requirement', 'issues'))):
    """ A single validation failure.

    Issues are immutable: when an issue crosses a composite boundary, the composite
    creates a copy with its own key prepended to the path (see `prefixed()`).

    :param kind: Issue kind: `'schema'` or `'validation'`
    :type kind: str
    :param type: The discriminant of the schema or constraint that has failed, e.g. `'string'`, `'min_length'`
    :type type: str
    :param input: The offending input value
    :param expects: Human-readable description of what was expected
    :type expects: str
    :param received: Tag of what was actually received (e.g. `'int'`), or `None` if not applicable
    :type received: str|None
    :param message: The resolved error message
    :type message: str
    :param path: Path to the error value, from the root.

        E.g. if an invalid value was encountered at ['a']['b'][1], then path=('a', 'b', 1).

    :type path: tuple
    :param requirement: The constraint parameter, if any (e.g. `3` for `MinLength(schema, 3)`)
    :param issues: Nested issues: the reasons of every member that failed in a `Union`
    :type issues: tuple[Issue]|None
    """

    __slots__ = ()

    def __new__(cls, kind, type, input, expects, received=None, message=None, path=(), requirement=None, issues=None):
        return super(Issue, cls).__new__(cls, kind, type, input, expects, received, message, tuple(path), requirement, issues)

    def prefixed(self, key):
        """ Get a copy of this issue with `key` prepended to its path.

        This is how composites report their children's issues:

        ```python
        issue.path  #-> ('b', 1)
        issue.prefixed('a').path  #-> ('a', 'b', 1)
        ```

        :param key: Object key, array index, or map key
        :rtype: Issue
        """
        return self._replace(path=(key,) + self.path)

    def __str__(self):
        return '{message}: expected {0.expects}, got {0.received}'.format(
            self,
            message=self.message if not self.path else '{} @ {}'.format(
                self.message,
                ''.join(map(
                    lambda v: '[{!r}]'.format(v),
                    self.path
                ))
            )
        )


class ValidationError(BaseError):
    """ Validation errors: raised by the throwing entry points.

    It carries all the issues collected while validating the input.
    The list is guaranteed to be plain: nested `Union` reasons stay inside `Issue.issues`.

    `ValidationError` is iterable, which allows to process the issues directly:

    ```python
    try:
        schema(input_value)
    except ValidationError as ee:
        reported_problems = {}
        for e in ee:  # Iterate over `Issue`s
            path_str = '.'.join(map(str, e.path))  # 'a.b.c.d', JavaScript-friendly :)
            reported_problems[path_str] = e.message
        #.. send reported_problems to the user
    ```

    :param issues: The collected issues
    :type issues: list[Issue]
    """

    def __init__(self, issues):
        assert issues, 'Issues list is empty'
        #: The collected issues
        self.issues = tuple(issues)
        #: Summary message
        self.message = '\n'.join(map(str, self.issues))
        super(ValidationError, self).__init__(self.message)

    def __iter__(self):
        return iter(self.issues)

    def __len__(self):
        return len(self.issues)

    def __eq__(self, other):
        return type(other) is type(self) and other.issues == self.issues

    def __ne__(self, other):
        return not self == other

    __hash__ = BaseError.__hash__

    def __repr__(self):
        return '{cls}({0!r})'.format(list(self.issues), cls=type(self).__name__)

    def __str__(self):
        return self.message
