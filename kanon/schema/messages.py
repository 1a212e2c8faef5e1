""" Default error messages & their translation.

Messages are marked with `_()` at the definition site, but are only translated when an issue is created,
using the language from the call-scoped `Config.lang`.

Messages without parameters are plain strings; messages with parameters are `str.format()` templates
filled in with the issue's `requirement` and `received` values.

To plug in a translation, register any `gettext.NullTranslations` object:

```python
import gettext
from kanon import install_translations

install_translations('de', gettext.translation('kanon', localedir='locale', languages=['de']))
```
"""

import gettext
import threading


def _(message):
    """ Mark a message for translation. The actual translation is deferred until the issue is created. """
    return message


#: Gettext domain
DOMAIN = 'kanon'

#: Default catalog, keyed by the issue type
CATALOG = {
    # Primitives
    'string':       _('Expected string'),
    'number':       _('Expected number'),
    'integer':      _('Expected integer'),
    'boolean':      _('Expected boolean'),
    'bigint':       _('Expected bigint'),
    'date':         _('Expected date'),
    'symbol':       _('Expected symbol'),
    'null':         _('Expected null'),
    'undefined':    _('Expected undefined'),
    'void':         _('Expected void (undefined)'),
    'never':        _('This value should never exist'),
    'literal':      _('Expected literal value {requirement!r}, got {received}'),
    'enum':         _('Expected one of [{expects}], got {received}'),
    'native_enum':  _('Expected one of [{expects}], got {received}'),
    'keyof':        _('Expected one of: {expects}'),

    # Composites
    'object':       _('Expected object'),
    'array':        _('Expected array'),
    'tuple':        _('Expected tuple'),
    'record':       _('Expected record'),
    'map':          _('Expected map'),
    'set':          _('Expected set'),
    'tuple_length':     _('Expected tuple of length {requirement}, got {received}'),
    'tuple_min_length': _('Expected tuple of at least length {requirement}, got {received}'),
    'strict_object':    _('Object must not contain unexpected property: {requirement}'),
    'required':         _('Missing required field: {requirement}'),
    'map_key':          _('Key: {requirement}'),
    'map_value':        _('Value: {requirement}'),

    # Operators
    'union':        _('Value does not match any of the expected types'),
    'intersection': _('Intersection results could not be merged'),

    # Coercion
    'coerce_string':        _('Cannot coerce to string'),
    'coerce_number':        _('Cannot coerce to number'),
    'coerce_bigint':        _('Cannot coerce to bigint'),
    'coerce_date':          _('Invalid date'),
    'coerce_none_bigint':   _('Cannot convert null to BigInt'),
    'coerce_undefined_bigint': _('Cannot convert undefined to BigInt'),
    'coerce_none_date':     _('Cannot convert null to Date'),
    'coerce_undefined_date': _('Cannot convert undefined to Date'),

    # Lengths
    'string_min_length':    _('String must be at least {requirement} characters long'),
    'string_max_length':    _('String must be at most {requirement} characters long'),
    'string_length':        _('String must be exactly {requirement} characters long'),
    'array_min_length':     _('Array must have at least {requirement} items'),
    'array_max_length':     _('Array must have at most {requirement} items'),
    'array_length':         _('Array must have exactly {requirement} items'),
    'set_min_length':       _('Set must have at least {requirement} items'),
    'set_max_length':       _('Set must have at most {requirement} items'),
    'set_length':           _('Set must have exactly {requirement} items'),
    'map_min_length':       _('Map must have at least {requirement} entries'),
    'map_max_length':       _('Map must have at most {requirement} entries'),
    'map_length':           _('Map must have exactly {requirement} entries'),
    'unsized_length':       _('Expected a value with a length, got {received}'),

    # Strings
    'regex':        _('String must match pattern {requirement.pattern}'),
    'includes':     _('String must include "{requirement}"'),
    'starts_with':  _('String must start with "{requirement}"'),
    'ends_with':    _('String must end with "{requirement}"'),
    'lowercase':    _('String must be lowercase'),
    'uppercase':    _('String must be uppercase'),
    'email':        _('Invalid email format'),
    'url':          _('Invalid URL format'),
    'uuid':         _('Invalid UUID format'),

    # Numbers & dates
    'number_min_value':     _('Number must be at least {requirement}'),
    'number_max_value':     _('Number must be at most {requirement}'),
    'date_min_value':       _('Date must be at least {requirement:%Y-%m-%dT%H:%M:%S}'),
    'date_max_value':       _('Date must be at most {requirement:%Y-%m-%dT%H:%M:%S}'),
    'greater_than':         _('Number must be greater than {requirement}'),
    'less_than':            _('Number must be less than {requirement}'),
    'date_greater_than':    _('Date must be after {requirement:%Y-%m-%dT%H:%M:%S}'),
    'date_less_than':       _('Date must be before {requirement:%Y-%m-%dT%H:%M:%S}'),
    'multiple_of':          _('Number must be a multiple of {requirement}'),
    'positive':             _('Number must be positive'),
    'negative':             _('Number must be negative'),

    # Refinements
    'refine':       _('Invalid value'),
}


_translations = {}
_translations_lock = threading.Lock()


def install_translations(lang, translations):
    """ Register translations for a language.

    :param lang: Language code, as used in `Config.lang`
    :type lang: str
    :param translations: Translations object
    :type translations: gettext.NullTranslations
    """
    with _translations_lock:
        _translations[lang] = translations


def get_translations(lang):
    """ Get translations for the language.

    Falls back to the gettext lookup in the default locale directories, and to the untranslated messages after that.

    :type lang: str
    :rtype: gettext.NullTranslations
    """
    try:
        return _translations[lang]
    except KeyError:
        pass

    translations = gettext.translation(DOMAIN, languages=[lang], fallback=True)
    with _translations_lock:
        return _translations.setdefault(lang, translations)


def translate(message, lang):
    """ Translate a message into the language

    :type message: str
    :type lang: str|None
    :rtype: str
    """
    if not lang:
        return message
    return get_translations(lang).gettext(message)


def default_message(catalog_key, lang, expects=None, received=None, requirement=None):
    """ Render a default message from the catalog

    :param catalog_key: Catalog key
    :type catalog_key: str
    :param lang: Language
    :type lang: str|None
    :rtype: str
    """
    template = translate(CATALOG[catalog_key], lang)
    if '{' not in template:
        return template
    return template.format(expects=expects, received=received, requirement=requirement)
