from .base import Dialect
from .sqlglot_dialect import DIALECT_DEFAULTS, SQLGlotDialect

__all__ = ["Dialect", "DIALECT_DEFAULTS", "SQLGlotDialect"]
