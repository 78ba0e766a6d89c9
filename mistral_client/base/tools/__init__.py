"""Client-side tool-call dispatch."""

from .router import Function, FunctionHandler, FunctionRegistry

__all__ = ["Function", "FunctionHandler", "FunctionRegistry"]
