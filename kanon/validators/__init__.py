from .types import *
from .coercion import *
from .values import *
from .strings import *
from .numbers import *
from .predicates import *
from .wrappers import *
from .objects import *
from .containers import *
from .transforms import *
