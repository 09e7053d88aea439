from .config import (
    FIXED,
    RANDOM,
    ConfigError,
    SymbolSpec,
    default_symbols,
    load_config,
    symbols_from_dict,
    symbols_to_dict,
)
from .scanner import AnnotationResult, Position, Range, annotate, mulberry32
from .sidecar import build_document, read_sidecar, sidecar_path, write_sidecar

__all__ = [
    "FIXED",
    "RANDOM",
    "AnnotationResult",
    "ConfigError",
    "Position",
    "Range",
    "SymbolSpec",
    "annotate",
    "build_document",
    "default_symbols",
    "load_config",
    "mulberry32",
    "read_sidecar",
    "sidecar_path",
    "symbols_from_dict",
    "symbols_to_dict",
    "write_sidecar",
]
