""" Runtime schema validation and coercion.

Core features:

* Declarative schemas built from small composable pieces
* Coercion from common alternate representations
* All the issues at once, each with the path to the offending value
* Results without exceptions, or exceptions if you like them better
* Call-scoped config: language, custom messages, abort on the first issue
* A fast path for repeatedly validated object schemas

```python
from kanon import Object, String, Number, Optional, MinLength, parse

schema = Object({
    'name': MinLength(String(), 1),
    'age': Optional(Number()),
})

result = parse(schema, {'name': 'Alex', 'age': '18'})
result.success  #-> False
[(e.path, e.message) for e in result.error]  #-> [(('age',), 'Expected number')]
```
"""
# Core

from .schema.errors import BaseError, SchemaError, Issue, ValidationError
from .schema.util import const, Sentinel, register_type_name
from .schema.const import STATUS, KIND, EXTRA, ABSENT
from .schema.dataset import Dataset, Config, Result, create_dataset, create_success_dataset, create_failure_dataset
from .schema.messages import install_translations

from .schema import Schema, Coerced
from .schema.engine import Engine, parse, parse_bulk, validate
from .schema.compiler import FastPathCompiler, CompiledValidator, compile_schema

#: The "no value" singleton
UNDEFINED = const.UNDEFINED

# Validators
from .validators import *
