""" The dataset: the value+status+issues carrier threaded through one validation call.

Every schema's `run()` takes a dataset and returns it, upgrading the status and possibly rewriting the value:

* `unknown`: not validated yet. This is how every dataset starts.
* `success`: valid; `value` holds the sanitized (possibly coerced) value.
* `partial`: the value has the expected shape, but some constraints have failed. `issues` is non-empty.
* `failure`: invalid. `issues` is non-empty.

Invariant: `issues` is `None` unless the status is `partial` or `failure`, in which case it's a non-empty list.
"""

from collections import namedtuple

from .const import STATUS
from .errors import ValidationError


class Dataset(object):
    """ Validation dataset.

    Created once per call, mutated in place by each schema layer.

    :param value: The current value
    :param status: Validation status: one of `STATUS.*`
    :type status: str
    :param issues: Collected issues, or `None`
    :type issues: list[Issue]|None
    """

    __slots__ = ('status', 'value', 'issues')

    def __init__(self, value, status=STATUS.UNKNOWN, issues=None):
        self.status = status
        self.value = value
        self.issues = issues

    @property
    def typed(self):
        """ Whether the value has the expected shape (`success` or `partial`) """
        return self.status in STATUS.TYPED

    def succeed(self, value):
        """ Mark the dataset as valid, with the sanitized value

        :rtype: Dataset
        """
        self.status = STATUS.SUCCESS
        self.value = value
        return self

    def add_issue(self, issue):
        """ Add an issue without changing the status

        :type issue: Issue
        :rtype: Dataset
        """
        if self.issues is None:
            self.issues = [issue]
        else:
            self.issues.append(issue)
        return self

    def fail(self, issue=None):
        """ Mark the dataset as failed, optionally adding an issue

        :type issue: Issue|None
        :rtype: Dataset
        """
        if issue is not None:
            self.add_issue(issue)
        assert self.issues, 'A failed dataset must have issues'
        self.status = STATUS.FAILURE
        return self

    def __repr__(self):
        return '{cls}({0.status}, {0.value!r}, issues={0.issues!r})'.format(self, cls=type(self).__name__)


def create_dataset(value):
    """ Create a new dataset that's not validated yet

    :rtype: Dataset
    """
    return Dataset(value)


def create_success_dataset(value):
    """ Create a valid dataset

    :rtype: Dataset
    """
    return Dataset(value, STATUS.SUCCESS)


def create_failure_dataset(value, issue, *issues):
    """ Create a failed dataset.

    At least one issue is required by the signature.

    :type issue: Issue
    :rtype: Dataset
    """
    return Dataset(value, STATUS.FAILURE, [issue] + list(issues))


class Config(namedtuple('Config', ('lang', 'abort_early', 'message'))):
    """ Call-scoped validation config.

    Constructed once per `parse()`/`parse_bulk()` call, and never changed mid-call.

    :param lang: Language for the default error messages
    :type lang: str
    :param abort_early: Stop at the first issue.

        The first issue produced anywhere fails the whole tree: every enclosing composite stops iterating,
        so exactly one issue is reported.

    :type abort_early: bool
    :param message: Message override for all issues that don't have a schema message:
        a string, or a callable that receives the `Issue` and returns a string.
    :type message: str|callable|None
    """

    __slots__ = ()

    def __new__(cls, lang='en', abort_early=False, message=None):
        return super(Config, cls).__new__(cls, lang, bool(abort_early), message)

    @classmethod
    def make(cls, config=None):
        """ Get a `Config` from whatever the caller has provided

        :param config: `Config`, a dict of its fields, or `None` for defaults
        :type config: Config|dict|None
        :rtype: Config
        """
        if config is None:
            return DEFAULT_CONFIG
        if isinstance(config, Config):
            return config
        return cls(**config)


#: Default config
DEFAULT_CONFIG = Config()


class Result(object):
    """ Public validation result.

    It's read-only: `data` is the final value, `error` is the aggregate `ValidationError` or `None`.

    ```python
    result = parse(String(), 'a')
    result.success  #-> True
    result.data  #-> 'a'
    ```

    :param success: Whether the input is valid
    :type success: bool
    :param data: The sanitized value (only when valid)
    :param error: The error (only when invalid)
    :type error: ValidationError|None
    """

    __slots__ = ('success', 'data', 'error')

    def __init__(self, success, data=None, error=None):
        object.__setattr__(self, 'success', success)
        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'error', error)

    @classmethod
    def from_dataset(cls, dataset):
        """ Convert a final dataset into a public result

        :type dataset: Dataset
        :rtype: Result
        """
        if dataset.status == STATUS.SUCCESS:
            return cls(True, data=dataset.value)
        return cls(False, error=ValidationError(dataset.issues))

    @property
    def issues(self):
        """ The list of issues (empty on success)

        :rtype: tuple[Issue]
        """
        return self.error.issues if self.error is not None else ()

    def unwrap(self):
        """ Get the data, or raise the error

        :raises ValidationError: invalid input
        """
        if not self.success:
            raise self.error
        return self.data

    def __setattr__(self, name, value):
        raise AttributeError('{} is read-only'.format(type(self).__name__))

    def __eq__(self, other):
        return type(other) is type(self) and \
               (other.success, other.data, other.error) == (self.success, self.data, self.error)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        if self.success:
            return '{cls}(success=True, data={0.data!r})'.format(self, cls=type(self).__name__)
        return '{cls}(success=False, error={0.error!r})'.format(self, cls=type(self).__name__)
