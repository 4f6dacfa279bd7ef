"""In-memory model and parser for Type Language (TL) schemas."""

from .definition import Category, Definition
from .iterator import ParseResult, TlIterator, parse_tl_file, split_results
from .parameter import Flag, Parameter
from .ty import Type
from .utils import infer_id

__all__ = [
    "Category",
    "Definition",
    "Flag",
    "Parameter",
    "ParseResult",
    "TlIterator",
    "Type",
    "infer_id",
    "parse_tl_file",
    "split_results",
]
