"""
Schema nodes, hydration and compilation.
"""
from .schema_node import (
    SchemaNode,
    MISSING,
    NOT_A_BOOLEAN,
    NOT_ONE_OF,
    MISSING_REQUIRED,
    UNEXPECTED_FIELD
)
from .hydration import hydrate_schema, log_validation_failure
from .compiler import (
    CompiledSchema,
    SchemaCompiler,
    compile_schema,
    compile_schema_file
)

__all__ = [
    'SchemaNode',
    'MISSING',
    'NOT_A_BOOLEAN',
    'NOT_ONE_OF',
    'MISSING_REQUIRED',
    'UNEXPECTED_FIELD',
    'hydrate_schema',
    'log_validation_failure',
    'CompiledSchema',
    'SchemaCompiler',
    'compile_schema',
    'compile_schema_file',
]
