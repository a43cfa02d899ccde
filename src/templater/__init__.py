"""Primary public API for templater."""

from __future__ import annotations

from templater.core.config import DirsConfig, TemplaterConfig
from templater.core.context import PATH_PARAMS_KEY, ExecutionContext, Phase, RenderSession
from templater.core.engine import DefineExtension, NamedBlock
from templater.core.exceptions import (
    AmbiguousTemplateError,
    ConfigError,
    ExecuteError,
    InvalidWildcardValueError,
    MalformedPropsError,
    SlotContextError,
    SlotError,
    TemplateExecutionError,
    TemplateNotFoundError,
    TemplaterError,
    UnrecognizedWildcardTypeError,
    exception_messages,
    find_cause,
)
from templater.core.functions import (
    FunctionBuilder,
    FunctionKind,
    Scope,
    chain_functions,
    default_functions,
)
from templater.core.heads import HeadCache
from templater.core.paths import extended_extension, path_parameters, path_segments
from templater.core.props import new_kvs_props
from templater.core.resolver import TemplateMatch, resolve_template
from templater.core.templater import Templater
from templater.core.wildcards import WILDCARD_TYPES, coerce_wildcard
from templater.version import get_version


__version__ = get_version()


__all__ = [
    "PATH_PARAMS_KEY",
    "WILDCARD_TYPES",
    "AmbiguousTemplateError",
    "ConfigError",
    "DefineExtension",
    "DirsConfig",
    "ExecuteError",
    "ExecutionContext",
    "FunctionBuilder",
    "FunctionKind",
    "HeadCache",
    "InvalidWildcardValueError",
    "MalformedPropsError",
    "NamedBlock",
    "Phase",
    "RenderSession",
    "Scope",
    "SlotContextError",
    "SlotError",
    "TemplateExecutionError",
    "TemplateMatch",
    "TemplateNotFoundError",
    "Templater",
    "TemplaterConfig",
    "TemplaterError",
    "UnrecognizedWildcardTypeError",
    "__version__",
    "chain_functions",
    "coerce_wildcard",
    "default_functions",
    "exception_messages",
    "extended_extension",
    "find_cause",
    "new_kvs_props",
    "path_parameters",
    "path_segments",
    "resolve_template",
]
