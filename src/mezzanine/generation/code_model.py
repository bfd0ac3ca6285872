"""In-memory model of the generated Python source.

Specs are plain data until rendered. Rendering produces ASCII-only source in
which every string literal evaluates back to the exact original text.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .constants import INDENT
from ..errors import DuplicateMemberError


_SHORT_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def escape_string(text: str) -> str:
    """Render text as a double-quoted, ASCII-only Python string literal.

    Args:
        text (str): Arbitrary text, including lone surrogates.

    Returns:
        str: Literal for which ``ast.literal_eval`` returns ``text``.
    """
    escaped = []
    for char in text:
        short = _SHORT_ESCAPES.get(char)
        if short is not None:
            escaped.append(short)
            continue
        code_point = ord(char)
        if 0x20 <= code_point < 0x7F:
            escaped.append(char)
        elif code_point <= 0xFF:
            escaped.append(f"\\x{code_point:02x}")
        elif code_point <= 0xFFFF:
            escaped.append(f"\\u{code_point:04x}")
        else:
            escaped.append(f"\\U{code_point:08x}")
    return '"' + ''.join(escaped) + '"'


def render_string_expression(text: str, indent: int = 0) -> List[str]:
    """Render text as an expression spanning one or more source lines.

    Multi-line text becomes a parenthesized implicit concatenation with one
    literal per line of text; the first returned line has no indentation so it
    can follow an assignment.
    """
    chunks = text.splitlines(keepends=True)
    if len(chunks) <= 1:
        return [escape_string(text)]

    pad = INDENT * (indent + 1)
    lines = ["("]
    lines.extend(f"{pad}{escape_string(chunk)}" for chunk in chunks)
    lines.append(f"{INDENT * indent})")
    return lines


@dataclass
class ConstantSpec:
    """A string constant inside a generated type."""
    name: str
    value: str = field(repr=False)
    origin: Optional[str] = None  # Source location of the originating declaration

    def render(self, indent: int = 0) -> List[str]:
        expression = render_string_expression(self.value, indent)
        lines = [f"{INDENT * indent}{self.name}: str = {expression[0]}"]
        lines.extend(expression[1:])
        return lines


@dataclass
class TypeSpec:
    """A generated class holding constants and nested classes."""
    name: str
    constants: List[ConstantSpec] = field(default_factory=list)
    types: List['TypeSpec'] = field(default_factory=list)
    docstring: Optional[str] = None

    def member_named(self, name: str) -> Optional[Union[ConstantSpec, 'TypeSpec']]:
        """Find a direct member (constant or nested type) by name."""
        for member in self.constants + self.types:
            if member.name == name:
                return member
        return None

    def add_constant(self, constant: ConstantSpec, qualifier: Optional[str] = None) -> 'TypeSpec':
        """Add a constant.

        Raises:
            DuplicateMemberError: If a member with the same name exists.
        """
        qualifier = qualifier or self.name
        if self.member_named(constant.name) is not None:
            raise DuplicateMemberError(f"{qualifier}.{constant.name}", constant.origin)
        self.constants.append(constant)
        return self

    def add_type(self, type_spec: 'TypeSpec', qualifier: Optional[str] = None) -> 'TypeSpec':
        """Add a nested type, merging into an existing nested type of the same name.

        Raises:
            DuplicateMemberError: If merging would redefine a constant, or the
                name is already taken by a constant.
        """
        qualifier = qualifier or self.name
        existing = self.member_named(type_spec.name)
        if existing is None:
            self.types.append(type_spec)
            return self
        if not isinstance(existing, TypeSpec):
            raise DuplicateMemberError(f"{qualifier}.{type_spec.name}")

        nested_qualifier = f"{qualifier}.{existing.name}"
        for constant in type_spec.constants:
            existing.add_constant(constant, nested_qualifier)
        for nested in type_spec.types:
            existing.add_type(nested, nested_qualifier)
        return self

    def constant_count(self) -> int:
        """Count constants in this type and all nested types."""
        return len(self.constants) + sum(t.constant_count() for t in self.types)

    def render(self, indent: int = 0) -> List[str]:
        body_pad = INDENT * (indent + 1)
        lines = [f"{INDENT * indent}class {self.name}:"]
        has_body = False

        if self.docstring:
            lines.append(f'{body_pad}"""{self.docstring}"""')
            has_body = True

        for constant in self.constants:
            lines.extend(constant.render(indent + 1))
            has_body = True

        for nested in self.types:
            if has_body:
                lines.append("")
            lines.extend(nested.render(indent + 1))
            has_body = True

        if not has_body:
            lines.append(f"{body_pad}pass")
        return lines


@dataclass
class CompilationUnit:
    """A generated module bound to a package, holding one top-level type."""
    package_name: str
    module_name: str
    type_spec: TypeSpec
    header: Optional[str] = None

    @property
    def relative_path(self) -> Path:
        """Path of the module file relative to the output directory."""
        return Path(*self.package_name.split(".")) / f"{self.module_name}.py"

    def render(self) -> str:
        lines = []
        if self.header:
            lines.extend([self.header, "", ""])
        lines.extend(self.type_spec.render())
        return "\n".join(lines) + "\n"
