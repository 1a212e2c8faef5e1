""" Fast-path compiler.

Object schemas are validated over and over again with the same entries, so it pays off to prepare
a specialized validator once: every entry becomes a pre-bound closure with its key, its child validator
and the missing-key policy resolved in advance. Nested object schemas are compiled recursively,
even when wrapped with `Optional()`, `Default()` or a constraint.

The compiled validator is behavior-preserving: for any input, it produces exactly the same dataset
as the interpreted `schema.run()`: same status, same value, same issues in the same order.
It even creates its issues with the schema's own helpers.

Compiled validators are cached by schema identity, for as long as the compiler lives: schemas are expected
to be long-lived, built once at import time and reused for every call. Only object schemas are cached:
the rest are validated with the interpreted path.
When a schema can't be compiled, the compiler silently falls back to the interpreted path.
"""

import logging
import threading
from collections.abc import Mapping

from .const import EXTRA, ABSENT, STATUS
from .dataset import Dataset
from .util import const

logger = logging.getLogger(__name__)


class CompiledValidator(object):
    """ A schema validator prepared by the compiler

    :param schema: The source schema
    :type schema: Schema
    :param run: Validation function: `run(dataset, config) -> dataset`
    :type run: callable
    :param is_fallback: Whether this is just the interpreted path of the schema
    :type is_fallback: bool
    """

    __slots__ = ('schema', 'run', 'is_fallback')

    def __init__(self, schema, run, is_fallback=False):
        self.schema = schema
        self.run = run
        self.is_fallback = is_fallback

    def __call__(self, dataset, config):
        return self.run(dataset, config)

    def __repr__(self):
        return '{cls}({0.schema!r}{fallback})'.format(
            self, cls=type(self).__name__,
            fallback=', fallback' if self.is_fallback else '')


def is_compilable(schema):
    """ Test whether the schema is an object schema the compiler knows how to specialize """
    return schema.type == 'object' and isinstance(getattr(schema, 'entries', None), dict)


class FastPathCompiler(object):
    """ Compiles object schemas into specialized validators, and caches them by schema identity.

    Thread-safe: two threads compiling the same schema simultaneously both succeed,
    and the first one to store its validator wins.
    """

    def __init__(self):
        self._cache = {}
        self._lock = threading.Lock()

    def get(self, schema):
        """ Get the cached validator for the schema, compiling it on first use

        :type schema: Schema
        :rtype: CompiledValidator
        """
        if not is_compilable(schema):
            # Interpreted path: never cached
            return CompiledValidator(schema, schema.run, is_fallback=True)

        try:
            return self._cache[schema]
        except KeyError:
            pass

        # Compile outside of the lock: compilation may recurse into nested schemas
        compiled = self.compile(schema)
        with self._lock:
            return self._cache.setdefault(schema, compiled)

    def compile(self, schema):
        """ Compile the schema, without touching the cache.

        Never fails: falls back to the interpreted path instead.

        :type schema: Schema
        :rtype: CompiledValidator
        """
        if not is_compilable(schema):
            return CompiledValidator(schema, schema.run, is_fallback=True)

        try:
            compiled = CompiledValidator(schema, self._compile_object(schema))
        except Exception as e:
            logger.debug('Fast path unavailable for %r, falling back: %s', schema, e)
            return CompiledValidator(schema, schema.run, is_fallback=True)

        logger.debug('Compiled %r with %d entries', schema, len(schema.entries))
        return compiled

    def clear(self):
        """ Drop all cached validators """
        with self._lock:
            self._cache.clear()

    def __len__(self):
        return len(self._cache)

    def _compile_child(self, schema):
        """ Get the run function for a child schema: compiled when it holds a nested object, interpreted otherwise """
        run = self._compile_nested(schema)
        return schema.run if run is None else run

    def _compile_nested(self, schema):
        """ Compile a nested object schema, looking through transparent wrappers: `Optional(Object(...))` and alike.

        The wrapper keeps its own semantics: it receives the compiled validator in place of the wrapped schema.

        :return: The run function, or `None` when there's no object schema to compile
        """
        if is_compilable(schema):
            return self.get(schema).run
        if getattr(schema, 'transparent', False):
            inner = self._compile_nested(schema.wrapped)
            if inner is not None:
                wrap = schema.wrap
                return lambda dataset, config: wrap(inner, dataset, config)
        return None

    def _compile_entry(self, parent, key, schema):
        """ Compile a single declared key into `entry(value, dataset, config) -> child dataset|None|False`.

        Returns `None` when the key was skipped, and `False` when it was reported as missing.
        """
        run = self._compile_child(schema)
        absent = parent.absent
        UNDEFINED = const.UNDEFINED

        if absent == ABSENT.SKIP:
            def entry(value, dataset, config):
                if key in value:
                    return run(Dataset(value[key]), config)
                return None
        elif absent == ABSENT.REJECT:
            missing_issue = parent.missing_issue

            def entry(value, dataset, config):
                if key in value:
                    return run(Dataset(value[key]), config)
                dataset.add_issue(missing_issue(dataset, key, config))
                return False
        else:
            def entry(value, dataset, config):
                return run(Dataset(value[key] if key in value else UNDEFINED), config)
        return entry

    def _compile_object(self, schema):
        """ Compile an object schema into `run(dataset, config) -> dataset` """
        entries = tuple(
            (key, self._compile_entry(schema, key, child))
            for key, child in schema.entries.items()
        )
        declared = frozenset(schema.entries)
        extra = schema.extra
        type_issue = schema.type_issue
        extra_issue = schema.extra_issue
        UNDEFINED = const.UNDEFINED
        TYPED = STATUS.TYPED
        PARTIAL = STATUS.PARTIAL

        def run(dataset, config):
            value = dataset.value
            if not isinstance(value, Mapping):
                return dataset.fail(type_issue(dataset, config))

            abort_early = config.abort_early
            output = {}
            typed = True

            for key, entry in entries:
                child = entry(value, dataset, config)
                if child is None:
                    continue
                if child is False:
                    if abort_early:
                        return dataset.fail()
                    typed = False
                    continue

                if child.issues is not None:
                    for issue in child.issues:
                        dataset.add_issue(issue.prefixed(key))
                    if abort_early:
                        return dataset.fail()
                if child.status in TYPED:
                    if child.value is not UNDEFINED:
                        output[key] = child.value
                else:
                    typed = False

            if extra != EXTRA.STRIP:
                for key in value:
                    if key in declared:
                        continue
                    if extra == EXTRA.LOOSE:
                        output[key] = value[key]
                    else:
                        dataset.add_issue(extra_issue(dataset, key, config))
                        if abort_early:
                            return dataset.fail()
                        typed = False

            if dataset.issues is None:
                return dataset.succeed(output)
            if typed:
                dataset.status = PARTIAL
                dataset.value = output
                return dataset
            return dataset.fail()

        return run


def compile_schema(schema, cache=True, force_fallback=False, compiler=None):
    """ Get a fast-path validator for the schema.

    ```python
    from kanon import Object, String, compile_schema

    validator = compile_schema(Object({'name': String()}))
    validator.is_fallback  #-> False
    ```

    :param schema: The schema to compile
    :type schema: Schema
    :param cache: Use the compiler cache
    :type cache: bool
    :param force_fallback: Skip compilation and use the interpreted path
    :type force_fallback: bool
    :param compiler: The compiler to use. Defaults to the default engine's compiler
    :type compiler: FastPathCompiler|None
    :rtype: CompiledValidator
    """
    if force_fallback:
        return CompiledValidator(schema, schema.run, is_fallback=True)
    if compiler is None:
        from .engine import default_engine
        compiler = default_engine.compiler
    if cache:
        return compiler.get(schema)
    return compiler.compile(schema)
