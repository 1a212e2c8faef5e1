
class STATUS:
    """ Dataset status constants """

    #: Not validated yet
    UNKNOWN = 'unknown'

    #: Valid
    SUCCESS = 'success'

    #: The value has the right shape, but some constraints have failed
    PARTIAL = 'partial'

    #: Invalid
    FAILURE = 'failure'

    #: Statuses with a value that has the expected shape
    TYPED = frozenset((SUCCESS, PARTIAL))


class KIND:
    """ Issue kinds """

    #: Wrong fundamental type or shape
    SCHEMA = 'schema'

    #: Right shape, failed constraint or refinement
    VALIDATION = 'validation'


class EXTRA:
    """ Behavior constants for extra keys in an object (e.g. keys that are not defined in the schema) """

    #: Drop extra keys from the output
    STRIP = 'strip'

    #: Pass extra keys through verbatim (do not validate them)
    LOOSE = 'loose'

    #: Report every extra key as an issue
    STRICT = 'strict'


class ABSENT:
    """ Behavior constants for declared object keys that are missing from the input """

    #: Run the key's schema against `UNDEFINED`
    VALIDATE = 'validate'

    #: Skip the key: neither validated nor written to the output
    SKIP = 'skip'

    #: Report the key as missing, regardless of its schema
    REJECT = 'reject'
