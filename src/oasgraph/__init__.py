from __future__ import annotations

from oasgraph import openapi
from oasgraph.config import OasGraphConfig
from oasgraph.core.errors import (
    InvalidLink,
    InvalidSchema,
    IterationLimitExceeded,
    OasGraphError,
    OperationNotFound,
)
from oasgraph.core.naming import NameRegistry, beautify, beautify_and_store
from oasgraph.core.version import OASGRAPH_VERSION
from oasgraph.resolvers import PreparedRequest, build_resolver
from oasgraph.schema import build_schema, translate_document
from oasgraph.translation import Argument, TranslationContext, build_args, translate_type

__version__ = OASGRAPH_VERSION

__all__ = [
    "__version__",
    # Loading
    "openapi",
    "OasGraphConfig",
    # Translation
    "TranslationContext",
    "translate_type",
    "build_args",
    "Argument",
    "translate_document",
    "build_schema",
    "build_resolver",
    "PreparedRequest",
    # Naming
    "NameRegistry",
    "beautify",
    "beautify_and_store",
    # Errors
    "OasGraphError",
    "InvalidSchema",
    "IterationLimitExceeded",
    "InvalidLink",
    "OperationNotFound",
]
