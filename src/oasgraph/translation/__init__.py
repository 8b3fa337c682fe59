from oasgraph.translation.arguments import Argument, build_args
from oasgraph.translation.context import Link, Operation, TranslationContext
from oasgraph.translation.enums import resolve_enum
from oasgraph.translation.scalars import get_scalar_type
from oasgraph.translation.types import create_fields, resolve_reference, translate_type

__all__ = [
    "Argument",
    "Link",
    "Operation",
    "TranslationContext",
    "build_args",
    "create_fields",
    "get_scalar_type",
    "resolve_enum",
    "resolve_reference",
    "translate_type",
]
