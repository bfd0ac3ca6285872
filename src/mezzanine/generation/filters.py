"""Support filter deciding which marked declarations can be generated."""

from typing import Optional

from ..declarations.models import Declaration, DeclarationKind


SUPPORTED_KINDS = frozenset({DeclarationKind.FIELD, DeclarationKind.VARIABLE})
STRING_TYPE_NAMES = frozenset({"str", "builtins.str"})


def rejection_reason(declaration: Declaration) -> Optional[str]:
    """Explain why a declaration cannot be generated.

    Args:
        declaration (Declaration): Marked declaration to check.

    Returns:
        Optional[str]: Reason for rejection, or None when the declaration is supported.
    """
    if declaration.kind not in SUPPORTED_KINDS:
        return f"marker on a {declaration.kind.value}, expected a field or variable"
    if declaration.type_name not in STRING_TYPE_NAMES:
        declared = declaration.type_name or "no annotation"
        return f"declared type is {declared}, expected str"
    if not declaration.resource_path:
        return "resource path is missing or not a string literal"
    return None


def accepts(declaration: Declaration) -> bool:
    """Check whether a declaration meets the shape contract for generation."""
    return rejection_reason(declaration) is None
