import copy
import enum
import gettext
import unittest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from kanon import *
from kanon.schema.dataset import DEFAULT_CONFIG
from kanon.schema.util import Undefined as UndefinedType, get_received

from kanon_testing import KanonTestBase, s, issue


class Color(enum.Enum):
    RED = 'r'
    GREEN = 'g'


class DatasetTest(unittest.TestCase):
    """ Test the dataset & issue model """

    def test_undefined(self):
        """ Test Undefined: it should never ever match any check """
        self.assertFalse(UNDEFINED == 0)
        self.assertFalse(UNDEFINED == None)
        self.assertFalse(UNDEFINED == False)
        self.assertFalse(UNDEFINED)
        self.assertTrue(UNDEFINED != None)

        # The only way is to test `UNDEFINED is UNDEFINED`
        self.assertTrue(UNDEFINED is const.UNDEFINED)

        # Singleton, even when copied
        self.assertIs(UndefinedType(), UNDEFINED)
        self.assertIs(copy.copy(UNDEFINED), UNDEFINED)
        self.assertIs(copy.deepcopy({'a': UNDEFINED})['a'], UNDEFINED)

    def test_sentinel(self):
        """ Test Sentinel: unique markers """
        a = Sentinel('a')
        self.assertNotEqual(a, Sentinel('a'))
        self.assertEqual(a, a)
        self.assertEqual(repr(a), 'Sentinel(a)')

    def test_received(self):
        """ Test get_received() """
        self.assertEqual(get_received(None), 'None')
        self.assertEqual(get_received(UNDEFINED), 'undefined')
        self.assertEqual(get_received(True), 'bool')
        self.assertEqual(get_received(float('nan')), 'NaN')
        self.assertEqual(get_received(Color.RED), 'Enum')
        self.assertEqual(get_received(object()), 'object')

        # Custom names
        class Point(object):
            pass

        self.assertEqual(get_received(Point()), 'Point')
        register_type_name(Point, 'point')
        self.assertEqual(get_received(Point()), 'point')

    def test_constructors(self):
        """ Test dataset constructors """
        dataset = create_dataset(1)
        self.assertEqual(dataset.status, STATUS.UNKNOWN)
        self.assertEqual(dataset.value, 1)
        self.assertIsNone(dataset.issues)
        self.assertFalse(dataset.typed)

        dataset = create_success_dataset(1)
        self.assertEqual(dataset.status, STATUS.SUCCESS)
        self.assertIsNone(dataset.issues)
        self.assertTrue(dataset.typed)

        e = Issue(KIND.SCHEMA, 'string', 1, 'str', 'int', 'Expected string')
        dataset = create_failure_dataset(1, e)
        self.assertEqual(dataset.status, STATUS.FAILURE)
        self.assertEqual(dataset.issues, [e])
        self.assertFalse(dataset.typed)

        # A failure needs issues
        with self.assertRaises(AssertionError):
            create_dataset(1).fail()

    def test_issue(self):
        """ Test Issue """
        e = Issue(KIND.SCHEMA, 'number', 'x', 'number', 'str', 'Expected number')
        self.assertEqual(e.path, ())
        self.assertIsNone(e.requirement)
        self.assertIsNone(e.issues)

        # Prefixed: copies
        e2 = e.prefixed(1).prefixed('b').prefixed('a')
        self.assertEqual(e2.path, ('a', 'b', 1))
        self.assertEqual(e.path, ())
        self.assertEqual(e2.message, e.message)

        # Path is always a tuple
        self.assertEqual(Issue(KIND.SCHEMA, 'number', 'x', 'number', path=['a']).path, ('a',))

        # Formatting
        self.assertEqual(str(e), 'Expected number: expected number, got str')
        self.assertEqual(str(e2), "Expected number @ ['a']['b'][1]: expected number, got str")

    def test_validation_error(self):
        """ Test ValidationError """
        e1 = Issue(KIND.SCHEMA, 'number', 'x', 'number', 'str', 'Expected number', ('a',))
        e2 = Issue(KIND.VALIDATION, 'min_length', 'ab', 'min_length(3)', '2', 'Too short', ('b',))
        ee = ValidationError([e1, e2])

        self.assertEqual(list(ee), [e1, e2])
        self.assertEqual(len(ee), 2)
        self.assertEqual(ee.issues, (e1, e2))
        self.assertEqual(ee.message, str(e1) + '\n' + str(e2))
        self.assertEqual(str(ee), ee.message)
        self.assertEqual(ee, ValidationError([e1, e2]))
        self.assertNotEqual(ee, ValidationError([e1]))
        repr(ee)

        with self.assertRaises(AssertionError):
            ValidationError([])

    def test_result(self):
        """ Test Result """
        result = parse(String(), 'a')
        self.assertTrue(result.success)
        self.assertEqual(result.data, 'a')
        self.assertIsNone(result.error)
        self.assertEqual(result.issues, ())
        self.assertEqual(result.unwrap(), 'a')
        self.assertEqual(result, parse(String(), 'a'))

        result = parse(String(), 1)
        self.assertFalse(result.success)
        self.assertIsNone(result.data)
        self.assertIsInstance(result.error, ValidationError)
        self.assertEqual(len(result.issues), 1)
        with self.assertRaises(ValidationError):
            result.unwrap()
        repr(result)

        # Read-only
        with self.assertRaises(AttributeError):
            result.success = True
        with self.assertRaises(AttributeError):
            result.data = 'a'

    def test_config(self):
        """ Test Config """
        self.assertIs(Config.make(None), DEFAULT_CONFIG)
        self.assertEqual(DEFAULT_CONFIG, Config('en', False, None))

        config = Config(abort_early=True)
        self.assertIs(Config.make(config), config)

        config = Config.make({'abort_early': 1, 'lang': 'de'})
        self.assertIs(config.abort_early, True)
        self.assertEqual(config.lang, 'de')

        with self.assertRaises(TypeError):
            Config.make({'unknown': 1})

    def test_schema_base(self):
        """ Test the Schema protocol """
        schema = String()
        self.assertEqual(schema.kind, 'schema')
        self.assertEqual(schema.type, 'string')
        self.assertEqual(schema.expects, 'str')
        self.assertIs(schema.is_async, False)
        self.assertEqual(str(schema), 'str')
        self.assertEqual(repr(schema), 'String(str)')

        # run() mutates & returns the same dataset
        dataset = create_dataset('a')
        self.assertIs(schema.run(dataset, DEFAULT_CONFIG), dataset)
        self.assertEqual(dataset.status, STATUS.SUCCESS)

        # The coercion signal
        self.assertIs(String().check('a', DEFAULT_CONFIG), True)
        self.assertEqual(CoerceNumber().check('1', DEFAULT_CONFIG), Coerced(1))
        self.assertEqual(String().check(1, DEFAULT_CONFIG), 'Expected string')

        # Message must be a string or a callable
        with self.assertRaises(AssertionError):
            String(message=1)

        # Not a schema
        with self.assertRaises(SchemaError):
            Array(str)


class PrimitivesTest(KanonTestBase):
    """ Test primitive schemas """

    def test_String(self):
        schema = String()
        self.assertValid(schema, 'a')
        self.assertValid(schema, '')
        self.assertInvalid(schema, 1, issue('schema', 'string', 'str', s.t_int, 'Expected string', input=1))
        self.assertInvalid(schema, b'a', issue('schema', 'string', 'str', 'bytes', 'Expected string'))
        self.assertInvalid(schema, UNDEFINED, issue('schema', 'string', 'str', s.t_undefined, 'Expected string'))

    def test_Number(self):
        schema = Number()
        self.assertValid(schema, 1)
        self.assertValid(schema, 1.5)
        self.assertValid(schema, float('inf'))
        self.assertInvalid(schema, True, issue('schema', 'number', 'number', s.t_bool, 'Expected number'))
        self.assertInvalid(schema, '1', issue('schema', 'number', 'number', s.t_str, 'Expected number'))
        self.assertInvalid(schema, float('nan'), issue('schema', 'number', 'number', 'NaN', 'Expected number'))

    def test_Integer(self):
        schema = Integer()
        self.assertValid(schema, 1)
        self.assertValid(schema, 2.0)
        self.assertInvalid(schema, 1.5, issue('schema', 'integer', 'int', s.t_float, 'Expected integer'))
        self.assertInvalid(schema, False)

    def test_Boolean(self):
        schema = Boolean()
        self.assertValid(schema, True)
        self.assertValid(schema, False)
        self.assertInvalid(schema, 1, issue('schema', 'boolean', 'bool', s.t_int, 'Expected boolean'))

    def test_BigInt(self):
        schema = BigInt()
        self.assertValid(schema, 10 ** 30)
        self.assertInvalid(schema, True, issue('schema', 'bigint', 'int', s.t_bool, 'Expected bigint'))
        self.assertInvalid(schema, 1.0)

    def test_Date(self):
        schema = Date()
        now = datetime.now()
        self.assertValid(schema, now)
        self.assertInvalid(schema, date.today(), issue('schema', 'date', 'datetime', 'date', 'Expected date'))
        self.assertInvalid(schema, '2014-01-01')

    def test_Symbol(self):
        schema = Symbol()
        marker = Sentinel('marker')
        self.assertIs(schema(marker), marker)
        self.assertInvalid(schema, 'marker', issue('schema', 'symbol', 'sentinel', s.t_str, 'Expected symbol'))

    def test_Null_Undefined(self):
        self.assertValid(Null(), None)
        self.assertInvalid(Null(), UNDEFINED, issue('schema', 'null', 'None', s.t_undefined, 'Expected null'))

        self.assertValid(Undefined(), UNDEFINED)
        self.assertInvalid(Undefined(), None, issue('schema', 'undefined', 'undefined', s.t_none, 'Expected undefined'))

        self.assertValid(Void(), UNDEFINED)
        self.assertInvalid(Void(), 0, issue('schema', 'void', 'undefined', s.t_int, 'Expected void (undefined)'))

    def test_Any_Unknown_Never(self):
        for schema in (AnyValue(), Unknown()):
            self.assertValid(schema, None)
            self.assertValid(schema, UNDEFINED)
            self.assertValid(schema, {'a': [1]})

        self.assertInvalid(Never(), None, issue('schema', 'never', 'never', s.t_none, 'This value should never exist'))
        self.assertInvalid(Never(), UNDEFINED)

    def test_Literal(self):
        schema = Literal('admin')
        self.assertEqual(schema.expects, "'admin'")
        self.assertValid(schema, 'admin')
        self.assertInvalid(schema, 'user', issue('schema', 'literal', "'admin'", s.t_str,
                                                 "Expected literal value 'admin', got str", requirement='admin'))

        # Strict equality
        schema = Literal(1)
        self.assertValid(schema, 1)
        self.assertValid(schema, 1.0)
        self.assertInvalid(schema, True)
        self.assertInvalid(schema, '1')

        # None
        self.assertValid(Literal(None), None)
        self.assertInvalid(Literal(None), UNDEFINED)

    def test_Enum(self):
        schema = Enum(['red', 'green', 0])
        self.assertEqual(schema.expects, "'red', 'green', 0")
        self.assertValid(schema, 'red')
        self.assertValid(schema, 0)
        self.assertInvalid(schema, False, issue('schema', 'enum', "'red', 'green', 0", s.t_bool,
                                                "Expected one of ['red', 'green', 0], got bool"))
        self.assertInvalid(schema, 'blue')

        with self.assertRaises(SchemaError):
            Enum([])

    def test_NativeEnum(self):
        schema = NativeEnum(Color)
        self.assertValid(schema, Color.RED)
        self.assertValid(schema, 'r')  # unchanged
        self.assertInvalid(schema, 'b', issue('schema', 'native_enum', 'Color.RED, Color.GREEN', s.t_str,
                                              'Expected one of [Color.RED, Color.GREEN], got str'))

        with self.assertRaises(SchemaError):
            NativeEnum(['r', 'g'])


class CoercionTest(KanonTestBase):
    """ Test coercion schemas """

    def test_CoerceString(self):
        schema = CoerceString()
        self.assertValid(schema, 'a')
        self.assertValid(schema, 1, '1')
        self.assertValid(schema, None, 'None')
        self.assertValid(schema, b'abc', 'abc')
        self.assertInvalid(schema, b'\xff', issue('schema', 'string', 'str', 'bytes', 'Cannot coerce to string'))
        self.assertInvalid(schema, UNDEFINED, issue('schema', 'string', 'str', s.t_undefined, 'Cannot coerce to string'))

    def test_CoerceNumber(self):
        schema = CoerceNumber()

        # Already a number: unchanged
        value = 10 ** 30
        self.assertIs(schema(value), value)
        self.assertValid(schema, 42)

        # Converted
        self.assertValid(schema, '42', 42)
        self.assertValid(schema, ' 1.5 ', 1.5)
        self.assertValid(schema, '', 0)
        self.assertValid(schema, '   ', 0)
        self.assertValid(schema, None, 0)
        self.assertValid(schema, True, 1)
        self.assertValid(schema, Decimal('2.5'), 2.5)
        self.assertValid(schema, '1e3', 1000.0)
        self.assertIsInstance(schema('42'), int)

        # Failures
        self.assertInvalid(schema, 'abc', issue('schema', 'number', 'number', s.t_str, 'Cannot coerce to number',
                                                input='abc'))
        self.assertInvalid(schema, 'nan', issue('schema', 'number', 'number', s.t_str, 'Cannot coerce to number'))
        self.assertInvalid(schema, float('nan'), issue('schema', 'number', 'number', 'NaN', 'Cannot coerce to number'))
        self.assertInvalid(schema, UNDEFINED)
        self.assertInvalid(schema, [1])
        self.assertInvalid(schema, {})

    def test_CoerceBoolean(self):
        schema = CoerceBoolean()
        self.assertValid(schema, True)
        self.assertValid(schema, 0, False)
        self.assertValid(schema, 'x', True)
        self.assertValid(schema, '', False)
        self.assertValid(schema, None, False)
        self.assertValid(schema, UNDEFINED, False)
        self.assertValid(schema, [0], True)

    def test_CoerceBigInt(self):
        schema = CoerceBigInt()
        self.assertValid(schema, 5)
        self.assertValid(schema, '42', 42)
        self.assertValid(schema, ' -7 ', -7)
        self.assertValid(schema, '', 0)
        self.assertValid(schema, 5.0, 5)
        self.assertValid(schema, True, 1)
        self.assertValid(schema, Decimal('7'), 7)

        self.assertInvalid(schema, 5.5, issue('schema', 'bigint', 'int', s.t_float, 'Cannot coerce to bigint'))
        self.assertInvalid(schema, 'abc', issue('schema', 'bigint', 'int', s.t_str, 'Cannot coerce to bigint'))
        self.assertInvalid(schema, float('inf'))
        self.assertInvalid(schema, None, issue('schema', 'bigint', 'int', s.t_none, 'Cannot convert null to BigInt'))
        self.assertInvalid(schema, UNDEFINED, issue('schema', 'bigint', 'int', s.t_undefined,
                                                    'Cannot convert undefined to BigInt'))

    def test_CoerceDate(self):
        schema = CoerceDate()
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)

        now = datetime.now()
        self.assertIs(schema(now), now)

        # ISO 8601
        self.assertValid(schema, '2014-09-06T21:22:23', datetime(2014, 9, 6, 21, 22, 23))
        self.assertValid(schema, ' 2014-09-06 ', datetime(2014, 9, 6))
        self.assertValid(schema, '2014-09-06T21:22:23Z', datetime(2014, 9, 6, 21, 22, 23, tzinfo=timezone.utc))

        # Timestamps in milliseconds
        self.assertValid(schema, 0, epoch)
        self.assertValid(schema, 1500, epoch + timedelta(seconds=1.5))
        self.assertValid(schema, True, epoch + timedelta(milliseconds=1))

        # Dates
        self.assertValid(schema, date(2014, 9, 6), datetime(2014, 9, 6))

        # Failures
        self.assertInvalid(schema, 'nope', issue('schema', 'date', 'datetime', s.t_str, 'Invalid date'))
        self.assertInvalid(schema, float('nan'), issue('schema', 'date', 'datetime', 'NaN', 'Invalid date'))
        self.assertInvalid(schema, float('inf'))
        self.assertInvalid(schema, None, issue('schema', 'date', 'datetime', s.t_none, 'Cannot convert null to Date'))
        self.assertInvalid(schema, UNDEFINED, issue('schema', 'date', 'datetime', s.t_undefined,
                                                    'Cannot convert undefined to Date'))

        # Custom formats
        schema = CoerceDate('%d.%m.%Y')
        self.assertValid(schema, '06.09.2014', datetime(2014, 9, 6))
        self.assertValid(schema, '2014-09-06', datetime(2014, 9, 6))

        schema = CoerceDate(['%d.%m.%Y', '%d/%m/%Y %H:%M'])
        self.assertValid(schema, '06/09/2014 21:22', datetime(2014, 9, 6, 21, 22))


class ConstraintsTest(KanonTestBase):
    """ Test constraint combinators """

    def test_lengths(self):
        schema = MinLength(String(), 3)
        self.assertValid(schema, 'abc')
        self.assertInvalid(schema, 'ab', issue('validation', 'min_length', 'min_length(3)', '2',
                                               'String must be at least 3 characters long', requirement=3))
        # The wrapped schema fails first: the constraint never runs
        self.assertInvalid(schema, 1, issue('schema', 'string', 'str', s.t_int, 'Expected string'))

        # Messages depend on the value
        self.assertInvalid(MinLength(Array(Number()), 2), [1], issue('validation', 'min_length', 'min_length(2)', '1',
                                                                     'Array must have at least 2 items'))
        self.assertInvalid(MaxLength(String(), 2), 'abc', issue('validation', 'max_length', 'max_length(2)', '3',
                                                                'String must be at most 2 characters long'))
        self.assertInvalid(Length(String(), 2), 'a', issue('validation', 'length', 'length(2)', '1',
                                                           'String must be exactly 2 characters long'))
        self.assertInvalid(Length(Set(Number()), 1), {1, 2}, issue('validation', 'length', 'length(1)', '2',
                                                                   'Set must have exactly 1 items'))
        self.assertValid(Length(Tuple([Number()]), 1), [1], (1,))

        # A value without a length fails the constraint
        schema = MinLength(Union(String(), Number()), 2)
        self.assertValid(schema, 'ab')
        self.assertInvalid(schema, 5, issue('validation', 'min_length', 'min_length(2)', s.t_int,
                                            'Expected a value with a length, got int', requirement=2))
        self.assertInvalid(MaxLength(Union(String(), Null()), 2), None, issue('validation', 'max_length'))

        # Malformed
        for bad in (-1, 1.5, None, True):
            with self.assertRaises(SchemaError):
                MinLength(String(), bad)

    def test_chain(self):
        """ A failed constraint still lets the next constraint run """
        schema = Lowercase(MinLength(String(), 3))
        self.assertInvalid(schema, 'A',
                           issue('validation', 'min_length', message='String must be at least 3 characters long'),
                           issue('validation', 'lowercase', 'lowercase', s.t_str, 'String must be lowercase'))

        # Dataset-level: partial, with the typed value
        dataset = schema.run(create_dataset('A'), Config())
        self.assertEqual(dataset.status, STATUS.PARTIAL)
        self.assertEqual(dataset.value, 'A')
        self.assertEqual(len(dataset.issues), 2)

    def test_strings(self):
        self.assertValid(Regex(String(), r'^\d+$'), '123')
        self.assertInvalid(Regex(String(), r'^\d+$'), 'a', issue('validation', 'regex', message=r'String must match pattern ^\d+$'))
        self.assertValid(Regex(String(), r'\d'), 'a1b')  # searched anywhere

        self.assertValid(Includes(String(), '@'), 'a@b')
        self.assertInvalid(Includes(String(), '@'), 'ab', issue('validation', 'includes', "includes('@')",
                                                               message='String must include "@"', requirement='@'))
        self.assertValid(StartsWith(String(), 'a'), 'abc')
        self.assertInvalid(StartsWith(String(), 'a'), 'bc', issue('validation', 'starts_with', message='String must start with "a"'))
        self.assertValid(EndsWith(String(), 'c'), 'abc')
        self.assertInvalid(EndsWith(String(), 'c'), 'ab', issue('validation', 'ends_with', message='String must end with "c"'))

        self.assertValid(Lowercase(String()), 'abc_1')
        self.assertValid(Uppercase(String()), 'ABC_1')
        self.assertInvalid(Uppercase(String()), 'Abc', issue('validation', 'uppercase', message='String must be uppercase'))

        with self.assertRaises(SchemaError):
            Regex(String(), '(')
        with self.assertRaises(SchemaError):
            Includes(String(), 1)

        # Non-strings fail the constraint
        schema = Union(String(), Number())
        self.assertInvalid(Lowercase(schema), 5, issue('validation', 'lowercase', received=s.t_int))
        self.assertInvalid(Regex(schema, r'\d'), 5, issue('validation', 'regex'))
        self.assertInvalid(Url(schema), 5, issue('validation', 'url'))

    def test_formats(self):
        schema = Email(String())
        self.assertValid(schema, 'user@example.com')
        self.assertValid(schema, 'first.last+tag@sub.example.co')
        self.assertInvalid(schema, 'user@localhost', issue('validation', 'email', 'email', s.t_str, 'Invalid email format'))
        self.assertInvalid(schema, 'user')

        schema = Url(String())
        self.assertValid(schema, 'https://example.com/path?q=1')
        self.assertValid(schema, 'ftp://example.com')
        self.assertInvalid(schema, 'example.com', issue('validation', 'url', message='Invalid URL format'))
        self.assertInvalid(Url(String(), 'https'), 'ftp://example.com')
        self.assertInvalid(schema, 'http://[::1')

        schema = Uuid(String())
        self.assertValid(schema, '123e4567-e89b-12d3-a456-426614174000')
        self.assertValid(schema, '123E4567-E89B-12D3-A456-426614174000')
        self.assertInvalid(schema, '123e4567e89b12d3a456426614174000', issue('validation', 'uuid', message='Invalid UUID format'))

    def test_numbers(self):
        schema = MinValue(Number(), 18)
        self.assertValid(schema, 18)
        self.assertInvalid(schema, 17, issue('validation', 'min_value', 'min_value(18)', '17',
                                             'Number must be at least 18', requirement=18))
        self.assertInvalid(MaxValue(Number(), 1), 1.5, issue('validation', 'max_value', received='1.5',
                                                              message='Number must be at most 1'))
        self.assertValid(MaxValue(BigInt(), 10 ** 30), 10 ** 30)

        self.assertValid(GreaterThan(Number(), 0), 0.1)
        self.assertInvalid(GreaterThan(Number(), 0), 0, issue('validation', 'greater_than', message='Number must be greater than 0'))
        self.assertValid(LessThan(Number(), 0), -1)
        self.assertInvalid(LessThan(Number(), 0), 0, issue('validation', 'less_than', message='Number must be less than 0'))

        self.assertValid(MultipleOf(Number(), 3), 9)
        self.assertValid(MultipleOf(Number(), 0.1), 0.3)
        self.assertInvalid(MultipleOf(Number(), 3), 4, issue('validation', 'multiple_of', message='Number must be a multiple of 3'))

        # Infinity and huge integers
        self.assertInvalid(MultipleOf(Number(), 2), float('inf'), issue('validation', 'multiple_of', received='inf'))
        self.assertInvalid(MultipleOf(Number(), 2), float('-inf'), issue('validation', 'multiple_of'))
        self.assertValid(MultipleOf(Number(), 0.5), 10 ** 400)
        self.assertValid(MultipleOf(Number(), 1.5), 3 * 10 ** 400)
        self.assertInvalid(MultipleOf(Number(), 1.5), 10 ** 400 + 1, issue('validation', 'multiple_of'))
        self.assertValid(MultipleOf(Number(), 10 ** 400), 10 ** 401)

        self.assertValid(Positive(Number()), 1)
        self.assertInvalid(Positive(Number()), 0, issue('validation', 'positive', 'positive', '0', 'Number must be positive'))
        self.assertValid(Negative(Number()), -1)
        self.assertInvalid(Negative(Number()), 0, issue('validation', 'negative', message='Number must be negative'))

        with self.assertRaises(SchemaError):
            MinValue(Number(), None)
        with self.assertRaises(SchemaError):
            MultipleOf(Number(), 0)
        with self.assertRaises(SchemaError):
            MultipleOf(Number(), float('inf'))

        # Values that can't be compared fail the constraint
        schema = Union(Number(), String())
        self.assertInvalid(MinValue(schema, 0), 'a', issue('validation', 'min_value', received="'a'"))
        self.assertInvalid(Positive(schema), 'a', issue('validation', 'positive'))
        self.assertInvalid(Negative(schema), 'a', issue('validation', 'negative'))

    def test_dates(self):
        bound = datetime(2020, 1, 1)
        self.assertValid(MinValue(Date(), bound), bound)
        self.assertInvalid(MinValue(Date(), bound), datetime(2019, 1, 1),
                           issue('validation', 'min_value', received='2019-01-01T00:00:00',
                                 message='Date must be at least 2020-01-01T00:00:00'))
        self.assertInvalid(MaxValue(Date(), bound), datetime(2021, 1, 1),
                           issue('validation', 'max_value', message='Date must be at most 2020-01-01T00:00:00'))
        self.assertInvalid(GreaterThan(CoerceDate(), bound), '2020-01-01',
                           issue('validation', 'greater_than', message='Date must be after 2020-01-01T00:00:00'))

    def test_Refine(self):
        schema = Refine(Number(), lambda v: v % 2 == 0, 'Must be even')
        self.assertValid(schema, 2)
        self.assertInvalid(schema, 3, issue('validation', 'refine', 'refine(<lambda>())', '3', 'Must be even'))
        self.assertInvalid(schema, '2', issue('schema', 'number'))

        # Default message
        self.assertInvalid(Refine(Number(), lambda v: False), 1, issue('validation', 'refine', message='Invalid value'))

        # Callable message
        schema = Refine(String(), str.isdigit, lambda e: 'Not digits: {!r}'.format(e.input))
        self.assertInvalid(schema, 'a', issue('validation', 'refine', 'refine(isdigit())', message="Not digits: 'a'"))

        # Refinements run in a chain
        def capitalized(v):
            return v[0].isupper()

        schema = Refine(Refine(String(), lambda v: len(v) > 1, 'Too short'), capitalized, 'Not capitalized')
        self.assertInvalid(schema, 'ab', issue('validation', 'refine', message='Not capitalized'))
        self.assertInvalid(schema, 'a',
                           issue('validation', 'refine', message='Too short'),
                           issue('validation', 'refine', message='Not capitalized'))

        # abort=True: the chain stops
        schema = Refine(Refine(String(), lambda v: len(v) > 0, 'Empty', abort=True), capitalized, 'Not capitalized')
        self.assertInvalid(schema, '', issue('validation', 'refine', message='Empty'))
        dataset = schema.run(create_dataset(''), Config())
        self.assertEqual(dataset.status, STATUS.FAILURE)

        # Exceptions from the predicate are not swallowed
        with self.assertRaises(IndexError):
            Refine(String(), capitalized)('')

        with self.assertRaises(SchemaError):
            Refine(String(), 'not callable')

    def test_Overwrite(self):
        schema = Overwrite(String(), str.strip)
        self.assertValid(schema, '  a  ', 'a')

        # Only applied on success
        schema = Overwrite(MinLength(String(), 3), str.upper)
        self.assertValid(schema, 'abc', 'ABC')
        self.assertInvalid(schema, 'ab', issue('validation', 'min_length'))
        dataset = schema.run(create_dataset('ab'), Config())
        self.assertEqual(dataset.value, 'ab')

        with self.assertRaises(SchemaError):
            Overwrite(String(), None)


class MessagesTest(KanonTestBase):
    """ Test custom messages & translations """

    def test_schema_message(self):
        self.assertMessages(String(message='Name required'), 1, ((), 'Name required'))
        self.assertMessages(String(message=lambda e: 'Got ' + e.received), 1, ((), 'Got int'))
        self.assertMessages(MinLength(String(), 3, message='Too short'), 'a', ((), 'Too short'))

        # Only the schema's own issues
        schema = Object({'name': String()}, message='Not an object')
        self.assertMessages(schema, [], ((), 'Not an object'))
        self.assertMessages(schema, {}, (('name',), 'Expected string'))

    def test_config_message(self):
        self.assertMessages(String(), 1, ((), 'Bad'), config={'message': 'Bad'})
        self.assertMessages(String(), 1, ((), 'Bad str'), config={'message': lambda e: 'Bad ' + e.expects})

        # The schema message wins
        self.assertMessages(String(message='Mine'), 1, ((), 'Mine'), config={'message': 'Bad'})

    def test_translations(self):
        class Translations(gettext.NullTranslations):
            def gettext(self, message):
                return {
                    'Expected string': 'Zeichenkette erwartet',
                    'String must be at least {requirement} characters long': 'Mindestens {requirement} Zeichen',
                }.get(message, message)

        install_translations('de-test', Translations())

        self.assertMessages(String(), 1, ((), 'Zeichenkette erwartet'), config=Config(lang='de-test'))
        self.assertMessages(MinLength(String(), 3), 'a', ((), 'Mindestens 3 Zeichen'), config=Config(lang='de-test'))
        self.assertMessages(Number(), 'a', ((), 'Expected number'), config=Config(lang='de-test'))

        # Unknown languages fall back to English
        self.assertMessages(String(), 1, ((), 'Expected string'), config=Config(lang='xx-unknown'))
        self.assertMessages(String(), 1, ((), 'Expected string'), config=Config(lang=None))


if __name__ == '__main__':
    unittest.main()
