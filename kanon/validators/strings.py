""" String constraints.

Each of them wraps a string schema, and tests the string once the wrapped schema accepts it:

```python
from kanon import String, Regex, Lowercase

schema = Lowercase(Regex(String(), r'^[a-z_]+$'))
schema('snake_case')  #-> 'snake_case'
schema('CamelCase')
#-> ValidationError: String must match pattern ^[a-z_]+$: expected regex('^[a-z_]+$'), got str
```
"""

import re
from urllib.parse import urlsplit

from ..schema.errors import SchemaError
from .base import Constraint


class SubstringConstraint(Constraint):
    """ Base for constraints parametrized by a substring """

    def __init__(self, schema, substring, message=None, abort=False):
        if not isinstance(substring, str):
            raise SchemaError('{} requires a string, got {!r}'.format(type(self).__name__, substring))
        super(SubstringConstraint, self).__init__(schema, substring, message, abort)


class Regex(Constraint):
    """ Validate that the string matches a regular expression.

    The pattern is searched anywhere in the string: anchor it with `^...$` for a full match.

    :param pattern: RegExp pattern, or a compiled one
    :type pattern: str|re.Pattern
    """
    type = 'regex'

    def __init__(self, schema, pattern, message=None, abort=False):
        try:
            pattern = re.compile(pattern)
        except (re.error, TypeError) as e:
            raise SchemaError('Invalid pattern {!r}: {}'.format(pattern, e))
        super(Regex, self).__init__(schema, pattern, message, abort)
        self.name = '{type}({pattern!r})'.format(type=self.type, pattern=pattern.pattern)

    def test(self, value):
        return isinstance(value, str) and self.requirement.search(value) is not None


class Includes(SubstringConstraint):
    """ Validate that the string contains a substring """
    type = 'includes'

    def test(self, value):
        return isinstance(value, str) and self.requirement in value


class StartsWith(SubstringConstraint):
    """ Validate that the string starts with a prefix """
    type = 'starts_with'

    def test(self, value):
        return isinstance(value, str) and value.startswith(self.requirement)


class EndsWith(SubstringConstraint):
    """ Validate that the string ends with a suffix """
    type = 'ends_with'

    def test(self, value):
        return isinstance(value, str) and value.endswith(self.requirement)


class Lowercase(Constraint):
    """ Validate that the string has no uppercase characters """
    type = 'lowercase'

    def __init__(self, schema, message=None, abort=False):
        super(Lowercase, self).__init__(schema, None, message, abort)

    def test(self, value):
        return isinstance(value, str) and value == value.lower()


class Uppercase(Constraint):
    """ Validate that the string has no lowercase characters """
    type = 'uppercase'

    def __init__(self, schema, message=None, abort=False):
        super(Uppercase, self).__init__(schema, None, message, abort)

    def test(self, value):
        return isinstance(value, str) and value == value.upper()


class Email(Constraint):
    """ Validate that the string is an e-mail address.

    Only the common format is accepted: a local part, '@', and a domain name with a top-level domain.

    ```python
    from kanon import String, Email

    schema = Email(String())
    schema('user@example.com')  #-> 'user@example.com'
    schema('user@localhost')
    #-> ValidationError: Invalid email format: expected email, got str
    ```
    """
    type = 'email'

    _rex = re.compile(r'^[\w+-]+(?:\.[\w+-]+)*@[\da-z]+(?:[.-][\da-z]+)*\.[a-z]{2,}$', re.IGNORECASE)

    def __init__(self, schema, message=None, abort=False):
        super(Email, self).__init__(schema, None, message, abort)

    def test(self, value):
        return isinstance(value, str) and self._rex.match(value) is not None


class Url(Constraint):
    """ Validate that the string is an absolute URL: with a scheme and a host.

    :param protocols: Allowed schemes, or `None` to allow any
    :type protocols: str|Iterable[str]|None
    """
    type = 'url'

    def __init__(self, schema, protocols=None, message=None, abort=False):
        super(Url, self).__init__(schema, None, message, abort)
        self.protocols = None if protocols is None else \
            tuple(x.lower()
                  for x in ((protocols,)
                            if isinstance(protocols, str) else
                            tuple(protocols)))

    def test(self, value):
        if not isinstance(value, str):
            return False
        try:
            parts = urlsplit(value)
        except ValueError:
            return False
        if not parts.scheme or not parts.netloc:
            return False
        return self.protocols is None or parts.scheme.lower() in self.protocols


class Uuid(Constraint):
    """ Validate that the string is a UUID in the canonical 8-4-4-4-12 hex format """
    type = 'uuid'

    _rex = re.compile(r'^[\da-f]{8}(?:-[\da-f]{4}){3}-[\da-f]{12}$', re.IGNORECASE)

    def __init__(self, schema, message=None, abort=False):
        super(Uuid, self).__init__(schema, None, message, abort)

    def test(self, value):
        return isinstance(value, str) and self._rex.match(value) is not None


__all__ = ('Regex', 'Includes', 'StartsWith', 'EndsWith', 'Lowercase', 'Uppercase', 'Email', 'Url', 'Uuid')
