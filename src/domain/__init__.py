"""Domain layer: errors, constants and schemas."""

from .errors import (
    ConfigError,
    ErrorCodes,
    InvalidRenderArgumentError,
    RenderError,
    TemplateCompileError,
    TemplateExecutionError,
    TemplateNotFoundError,
    UnsupportedEngineError,
    WriterError,
)
from .schemas import TemplateData, TemplatePaths

__all__ = [
    "RenderError",
    "ErrorCodes",
    "UnsupportedEngineError",
    "InvalidRenderArgumentError",
    "TemplateNotFoundError",
    "TemplateCompileError",
    "TemplateExecutionError",
    "WriterError",
    "ConfigError",
    "TemplateData",
    "TemplatePaths",
]
