"""Generation of type specs and the umbrella compilation unit."""

import keyword
from typing import Iterable

from .code_model import CompilationUnit, ConstantSpec, TypeSpec
from .constants import (
    GENERATED_HEADER,
    MODULE_NAME,
    PACKAGE_NAME,
    UMBRELLA_DOCSTRING,
    UMBRELLA_TYPE_NAME
)
from ..declarations.models import ContentPair
from ..errors import InvalidIdentifierError


def is_valid_identifier(name: str) -> bool:
    """Check that a name can be used as a generated class or constant name."""
    return name.isidentifier() and not keyword.iskeyword(name)


def generate_type_spec(pair: ContentPair) -> TypeSpec:
    """Generate the nested type chain embedding one resource.

    A field ``LICENSE`` of class ``Outer.Inner`` becomes
    ``class Outer: class Inner: LICENSE: str = "..."``.

    Args:
        pair (ContentPair): Declaration and the text of its resource.

    Returns:
        TypeSpec: Outermost type of the chain.

    Raises:
        InvalidIdentifierError: If an enclosing type name or the declaration
            name is not a valid Python identifier, e.g. a module named
            ``my-texts.py``.
    """
    declaration = pair.declaration
    for name in declaration.enclosing_type + (declaration.name,):
        if not is_valid_identifier(name):
            raise InvalidIdentifierError(name, declaration.location)

    constant = ConstantSpec(name=declaration.name, value=pair.text, origin=declaration.location)
    spec = TypeSpec(name=declaration.enclosing_type[-1], constants=[constant])
    for name in reversed(declaration.enclosing_type[:-1]):
        spec = TypeSpec(name=name, types=[spec])
    return spec


def generate_mezzanine_type_spec(type_specs: Iterable[TypeSpec]) -> TypeSpec:
    """Nest every generated type inside the umbrella ``Mezzanine`` type.

    Raises:
        DuplicateMemberError: If two declarations generate the same constant.
    """
    mezzanine = TypeSpec(name=UMBRELLA_TYPE_NAME, docstring=UMBRELLA_DOCSTRING)
    for type_spec in type_specs:
        mezzanine.add_type(type_spec)
    return mezzanine


def generate_compilation_unit(mezzanine: TypeSpec) -> CompilationUnit:
    """Bind the umbrella type to the fixed generated package."""
    return CompilationUnit(
        package_name=PACKAGE_NAME,
        module_name=MODULE_NAME,
        type_spec=mezzanine,
        header=GENERATED_HEADER
    )
