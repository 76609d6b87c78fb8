"""PLC prompt compiler package."""

from .compiler.pipeline import ContextCompiler, compile_context
from .config import CompilerConfig, GateConfig

__all__ = ["CompilerConfig", "ContextCompiler", "GateConfig", "compile_context"]
