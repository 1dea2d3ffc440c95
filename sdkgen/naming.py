"""Turn spec identifiers into TypeScript names.

Function names (when an operation has no operationId):
  - GET collection      -> list{Resources}
  - GET collection/{id} -> get{Resource}
  - POST collection     -> create{Resource}
  - PUT collection/{id} -> update{Resource}
  - DELETE col/{id}     -> delete{Resource}

Examples:
  GET    /pets              -> listPets
  GET    /pets/{petId}      -> getPet
  POST   /pets              -> createPet
  DELETE /pets/{petId}      -> deletePet
  GET    /store/inventory   -> listStoreInventory
  GET    /users/{id}/orders -> getUsersOrders
"""

from __future__ import annotations

import keyword
import re

# Standard HTTP method to verb mapping
_METHOD_VERBS: dict[str, str] = {
    "get": "list",
    "post": "create",
    "put": "update",
    "delete": "delete",
    "patch": "update",
}

_IRREGULAR_SINGULARS: dict[str, str] = {
    "people": "person",
    "children": "child",
    "statuses": "status",
    "addresses": "address",
    "analyses": "analysis",
}

# Service for untagged operations; "default" itself is reserved
DEFAULT_SERVICE = "defaultService"

_TS_RESERVED = {
    "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "enum", "export", "extends", "false", "finally", "for",
    "function", "if", "import", "in", "instanceof", "new", "null", "return", "super",
    "switch", "this", "throw", "true", "try", "typeof", "var", "void", "while", "with",
    "let", "static", "yield", "await", "interface", "package", "private", "protected",
    "public", "implements",
}


def _singularize(word: str) -> str:
    """Return the singular form of a resource name."""
    lower = word.lower()
    if lower in _IRREGULAR_SINGULARS:
        return _IRREGULAR_SINGULARS[lower]
    if lower.endswith("ies"):
        return word[:-3] + "y"
    if lower.endswith(("ses", "xes", "ches", "shes")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return word[:-1]
    return word


def _pluralize(word: str) -> str:
    """Return the plural form of a resource name."""
    if word.endswith("s"):
        return word
    if word.endswith("y") and word[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    return word + "s"


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def split_words(name: str) -> list[str]:
    """Split any identifier-ish string into lower-case words."""
    return [w for w in re.split(r"[^a-z0-9]+", camel_to_snake(name)) if w]


def to_camel(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def to_pascal(name: str) -> str:
    return "".join(w.capitalize() for w in split_words(name))


def safe_identifier(name: str) -> str:
    """Make *name* usable as a TypeScript identifier."""
    name = re.sub(r"[^A-Za-z0-9_$]", "_", name)
    if not name:
        return "_"
    if name[0].isdigit():
        name = "_" + name
    if name in _TS_RESERVED or keyword.iskeyword(name):
        name += "_"
    return name


def type_name(name: str) -> str:
    """Interface name for a component schema, e.g. 'pet-owner' -> 'PetOwner'."""
    pascal = to_pascal(name)
    return safe_identifier(pascal or name)


def service_name(tag: str) -> str:
    """File/module name for a tag, e.g. 'Pet Store' -> 'petStore'."""
    return safe_identifier(to_camel(tag) or DEFAULT_SERVICE)


def property_key(name: str) -> str:
    """Quote an object key when it is not a plain identifier."""
    if re.fullmatch(r"[A-Za-z_$][A-Za-z0-9_$]*", name):
        return name
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _extract_path_parts(path: str) -> list[str]:
    """Meaningful path segments, without {params} or a leading /api/vN."""
    path = re.sub(r"^/api(/v\d+)?(?=/|$)", "", path)
    return [p for p in path.split("/") if p and not p.startswith("{")]


def build_function_name(
    method: str,
    path: str,
    operation_id: str | None = None,
    camel_case: bool = True,
) -> str:
    """Build a service function name from an operation.

    Returns e.g. 'listPets' / 'getPet', or the snake_case forms when
    *camel_case* is false.
    """
    if operation_id:
        words = split_words(operation_id)
    else:
        method_lower = method.lower()
        parts = [w for p in _extract_path_parts(path) for w in split_words(p)]
        has_id = any(p.startswith("{") for p in path.split("/") if p)

        if method_lower == "get":
            verb = "get" if has_id else "list"
        else:
            verb = _METHOD_VERBS.get(method_lower, method_lower)

        if not parts:
            words = [verb, "root"]
        elif len(_extract_path_parts(path)) > 1:
            # Multi-segment paths: keep every segment
            words = [verb, *parts]
        elif verb == "list":
            words = [verb, *parts[:-1], _pluralize(parts[-1])]
        else:
            words = [verb, *parts[:-1], _singularize(parts[-1])]

    if not words:
        words = [method.lower()]
    if camel_case:
        name = words[0] + "".join(w.capitalize() for w in words[1:])
    else:
        name = "_".join(words)
    return safe_identifier(name)
