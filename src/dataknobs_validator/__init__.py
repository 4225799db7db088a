"""Composable validation with accumulated, path-aware messages.

This package provides:

- **Validators**: composable pipelines (``and_``, ``or_``, ``chain``, ``then``,
  ``map``) over atomic constraints
- **Results**: ``Success`` / ``Failure`` publicly, plus ``Both`` (a value with
  messages) while composing
- **Accumulation**: collect every violation, or stop at the first with
  ``fail_fast``
- **Paths**: every message knows the root and the field/index route to the
  offending value; self-referential objects terminate
- **Messages**: literal or catalog-based, with YAML/JSON catalogs

Example:
    ```python
    from dataknobs_validator import ObjectSchema, Validator
    from dataknobs_validator.constraints import Length, Min

    users = (
        ObjectSchema("User")
        .field("name", Validator.of(Length(1, 50)))
        .field("age", Validator.of(Min(0)))
    )
    result = users.try_validate({"name": "", "age": -1})
    for message in result.messages:
        print(message.path.full_name, message.text)
    ```
"""

from .accumulate import Accumulated, Error, Ok, ScopeToken, ValidationAbort, accumulating, ior
from .config import ValidationConfig, fixed_clock, system_clock
from .constraint import SATISFIED, Constraint, ConstraintContext, ConstraintResult, Custom, Violated
from .containers import EachElement, EachEntry, EachKey, EachValue
from .context import ValidationContext
from .exceptions import (
    ConfigurationError,
    MessageError,
    MessageNotFoundError,
    ValidationError,
    ValidatorError,
)
from .factory import ObjectFactory
from .log import LogEntry, logging_logger
from .messages import CatalogMessage, Message, MessageCatalog, TextMessage
from .nullable import NotNull, Nullable, WithDefault
from .path import Path
from .result import Both, Failure, Success, ValidationIor, ValidationResult
from .schema import ObjectSchema, lazy
from .validation import try_validate, validate
from .validator import Validator, either

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "try_validate",
    "validate",
    "ValidationConfig",
    "fixed_clock",
    "system_clock",
    # Results
    "ValidationResult",
    "ValidationIor",
    "Success",
    "Failure",
    "Both",
    # Context and scopes
    "ValidationContext",
    "Path",
    "ScopeToken",
    "ValidationAbort",
    "ior",
    "accumulating",
    "Accumulated",
    "Ok",
    "Error",
    # Constraints
    "Constraint",
    "ConstraintContext",
    "ConstraintResult",
    "Custom",
    "SATISFIED",
    "Violated",
    # Validators
    "Validator",
    "either",
    "Nullable",
    "WithDefault",
    "NotNull",
    "EachElement",
    "EachKey",
    "EachValue",
    "EachEntry",
    "ObjectSchema",
    "lazy",
    "ObjectFactory",
    # Messages
    "Message",
    "TextMessage",
    "CatalogMessage",
    "MessageCatalog",
    # Logging
    "LogEntry",
    "logging_logger",
    # Exceptions
    "ValidatorError",
    "ValidationError",
    "ConfigurationError",
    "MessageNotFoundError",
    "MessageError",
    "__version__",
]
