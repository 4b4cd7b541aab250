#!/usr/bin/env python3
"""
Terrain Constructor Exceptions

This module defines custom exceptions used throughout the tcon library.
Mesh operations themselves never raise: degenerate geometry propagates as
non-finite values. These exceptions cover the edges of the system, such as
building operations from user input, editing pipelines and writing files.
"""

class TConException(Exception):
    """Base class for all tcon exceptions."""
    pass

class OperationError(TConException):
    """Exception raised when an operation kind or its parameters are invalid."""
    pass

class PipelineError(TConException):
    """Exception raised when a pipeline is edited or built with a bad stage index."""
    pass

class ConfigError(TConException):
    """Exception raised when a pipeline document or settings file cannot be used."""
    pass

class ExportError(TConException):
    """Exception raised when a mesh cannot be written to disk."""
    pass
