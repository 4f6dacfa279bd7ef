"""Rules that map TL identifiers and types onto Rust names and paths.

Each helper is a pure function of the parsed schema:

* `rust_type_name` for a name after `struct`/`enum` (`SomeOkName`).
* `definition_path` / `type_path` for qualified paths (`crate::types::Foo`).
* `variant_name` for an arm inside an `enum`.
* `field_name` for a struct field or function argument.
* `function_name` for a generated `fn`.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..tl import Definition, Parameter, Type

TYPES_MODULE = "crate::types"
ENUMS_MODULE = "crate::enums"
REMOTE_CALL_BOUND = "crate::RemoteCall"

# Core types described by the schema itself but mapped onto Rust builtins.
SPECIAL_CASED_TYPES = frozenset(
    {"Bool", "Bytes", "Double", "Int32", "Int53", "Int64", "String", "Vector"}
)

OPTIONAL_MARKERS = ("; may be null", "; pass null")
OPTIONAL_ELEMENTS_MARKER = "; messages may be null"
BOTS_ONLY_MARKER = "; for bots only"

_BUILTIN_TYPES: Dict[str, str] = {
    "Bool": "bool",
    "true": "bool",
    "bytes": "String",
    "double": "f64",
    "int32": "i32",
    "int53": "i64",
    "int64": "i64",
    "string": "String",
    "vector": "Vec",
    "Vector": "Vec",
    "Ok": "()",
}

# int64 values travel as decimal strings on the wire.
_STRING_ENCODED_TYPES = frozenset({"int64"})

_RUST_KEYWORDS = frozenset(
    {
        "abstract", "as", "async", "await", "become", "box", "break", "const",
        "continue", "do", "dyn", "else", "enum", "extern", "false", "final", "fn",
        "for", "if", "impl", "in", "let", "loop", "macro", "match", "mod", "move",
        "mut", "override", "priv", "pub", "ref", "return", "static", "struct",
        "trait", "true", "try", "type", "typeof", "unsafe", "unsized", "use",
        "virtual", "where", "while", "yield",
    }
)  # fmt: skip
_NON_RAW_KEYWORDS: Dict[str, str] = {
    "self": "is_self",
    "super": "is_super",
    "crate": "is_crate",
}


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def _to_upper(char: str) -> str:
    return char.upper() if _is_lower(char) else char


def _to_lower(char: str) -> str:
    return char.lower() if _is_upper(char) else char


def rust_type_name(name: str) -> str:
    """Turn `"ns.some_OK_name"` into `"SomeOkName"`."""
    name = name.rsplit(".", 1)[-1]
    result: List[str] = []
    casing = "upper"
    for char in name:
        if char == "_":
            casing = "upper"
            continue
        if casing == "upper":
            result.append(_to_upper(char))
            casing = "lower"
        elif casing == "lower":
            result.append(_to_lower(char))
            casing = "lower" if _is_upper(char) else "preserve"
        else:
            result.append(char)
            casing = "lower" if _is_upper(char) else "preserve"
    return "".join(result)


def doc_lines(text: str) -> List[str]:
    """Render a description as `///` doc comment lines."""
    if not text:
        return []
    lines = []
    for line in text.split("\n"):
        line = line.strip()
        lines.append(f"/// {line}" if line else "///")
    return lines


def _module_path(root: str, namespace: tuple[str, ...]) -> str:
    return "::".join((root, *namespace))


# Definitions


def definition_type_name(definition: Definition) -> str:
    return rust_type_name(definition.name)


def function_name(definition: Definition) -> str:
    """Turn `getMe` into `get_me`."""
    name = definition.name.rsplit(".", 1)[-1]
    return "".join(f"_{char.lower()}" if _is_upper(char) else char for char in name)


def definition_path(definition: Definition) -> str:
    module = _module_path(TYPES_MODULE, definition.namespace)
    return f"{module}::{definition_type_name(definition)}"


def variant_name(definition: Definition) -> str:
    """Name of the enum arm for a constructor (`userEmpty = User` -> `Empty`)."""
    name = definition_type_name(definition)
    ty_name = type_name(definition.ty)

    variant = name
    if name.startswith(ty_name) and len(name) > len(ty_name):
        remainder = name[len(ty_name) :]
        if not _is_lower(remainder[0]):
            variant = remainder

    if variant == "":
        return name[_last_upper(name, len(name)) :]
    if variant == "Self":
        return name[_last_upper(name, len(name) - len(variant)) :]
    return variant


def _last_upper(name: str, limit: int) -> int:
    for index in range(limit - 1, -1, -1):
        if _is_upper(name[index]):
            return index
    return 0


def is_definition_bots_only(definition: Definition) -> bool:
    return BOTS_ONLY_MARKER in definition.description


def generic_params(definition: Definition, *, declaring: bool) -> str:
    """`<X: crate::RemoteCall>` when declaring, `<X>` when using."""
    names: List[str] = []
    for param in definition.params:
        if param.ty.generic_ref and param.ty.name not in names:
            names.append(param.ty.name)
    if not names:
        return ""
    if declaring:
        names = [f"{name}: {REMOTE_CALL_BOUND}" for name in names]
    return f"<{', '.join(names)}>"


# Types


def builtin_type(ty: Type) -> Optional[str]:
    return _BUILTIN_TYPES.get(ty.name)


def type_name(ty: Type) -> str:
    return rust_type_name(ty.name)


def is_ok(ty: Type) -> bool:
    return ty.name == "Ok"


def is_special_cased(ty: Type) -> bool:
    return ty.name in SPECIAL_CASED_TYPES


def _base_path(ty: Type) -> str:
    builtin = builtin_type(ty)
    if builtin is not None:
        return builtin
    if ty.generic_ref:
        return ty.name
    root = TYPES_MODULE if ty.bare else ENUMS_MODULE
    return f"{_module_path(root, ty.namespace)}::{type_name(ty)}"


def type_path(ty: Type, *, optional_generic_arg: bool = False) -> str:
    """Qualified Rust path of a type, such as `Vec<crate::enums::User>`."""
    path = _base_path(ty)
    if ty.generic_arg is not None:
        inner = type_path(ty.generic_arg)
        if optional_generic_arg:
            inner = f"Option<{inner}>"
        path = f"{path}<{inner}>"
    return path


def serde_as(ty: Type, *, optional_generic_arg: bool = False) -> Optional[str]:
    """`serde_with` adapter for types whose values travel as strings."""
    if ty.name in _STRING_ENCODED_TYPES:
        return "DisplayFromStr"
    if ty.generic_arg is not None:
        inner = serde_as(ty.generic_arg)
        if inner is not None:
            if optional_generic_arg:
                inner = f"Option<{inner}>"
            return f"{_base_path(ty)}<{inner}>"
    return None


# Parameters


def is_optional(param: Parameter) -> bool:
    if param.flag is not None and param.ty.name != "true":
        return True
    return any(marker in param.description for marker in OPTIONAL_MARKERS)


def has_optional_elements(param: Parameter) -> bool:
    return OPTIONAL_ELEMENTS_MARKER in param.description


def is_builtin_param(param: Parameter) -> bool:
    return builtin_type(param.ty) is not None or is_optional(param)


def is_param_bots_only(param: Parameter) -> bool:
    return BOTS_ONLY_MARKER in param.description


def field_name(param: Parameter) -> str:
    """Rust identifier for a parameter, escaping keywords."""
    name = param.name.lower()
    if name in _NON_RAW_KEYWORDS:
        return _NON_RAW_KEYWORDS[name]
    if name in _RUST_KEYWORDS:
        return f"r#{name}"
    return name


def wire_rename(param: Parameter) -> Optional[str]:
    """The serialized name when serde would not derive it from the field."""
    name = field_name(param)
    if name.startswith("r#"):
        name = name[2:]
    return None if name == param.name else param.name


def param_type(param: Parameter) -> str:
    """Rust type of a parameter, `Option`-wrapped when it is optional."""
    path = type_path(param.ty, optional_generic_arg=has_optional_elements(param))
    return f"Option<{path}>" if is_optional(param) else path


def param_serde_as(param: Parameter) -> Optional[str]:
    adapter = serde_as(param.ty, optional_generic_arg=has_optional_elements(param))
    if adapter is not None and is_optional(param):
        return f"Option<{adapter}>"
    return adapter


__all__ = [
    "BOTS_ONLY_MARKER",
    "OPTIONAL_MARKERS",
    "SPECIAL_CASED_TYPES",
    "builtin_type",
    "definition_path",
    "definition_type_name",
    "doc_lines",
    "field_name",
    "function_name",
    "generic_params",
    "has_optional_elements",
    "is_builtin_param",
    "is_definition_bots_only",
    "is_ok",
    "is_optional",
    "is_param_bots_only",
    "is_special_cased",
    "param_serde_as",
    "param_type",
    "rust_type_name",
    "serde_as",
    "type_name",
    "type_path",
    "variant_name",
    "wire_rename",
]
