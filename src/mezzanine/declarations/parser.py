"""Extraction of marked declarations from Python source files."""

import ast
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .models import Declaration, DeclarationKind


MARKER_NAME = "FileStream"

# Wrappers that qualify a declaration without changing its value type
_QUALIFIER_NAMES = frozenset({"ClassVar", "Final"})

# ``match`` statements exist from Python 3.10
_MATCH_NODES = (ast.Match,) if hasattr(ast, "Match") else ()


def parse_declarations(file_path: Union[str, Path], module: str) -> List[Declaration]:
    """Parse a Python source file and return every marked declaration in it.

    Args:
        file_path (Union[str, Path]): Path to the ``.py`` file.
        module (str): Dotted module name of the file.

    Returns:
        List[Declaration]: Marked declarations in source order.

    Raises:
        SyntaxError: If the file is not valid Python.
        OSError: If the file cannot be read.
    """
    file_path = Path(file_path)
    # Bytes so that PEP 263 coding cookies are honored
    tree = ast.parse(file_path.read_bytes(), filename=str(file_path))
    return parse_module(tree, module, file_path)


def parse_module(tree: ast.Module, module: str, file_path: Optional[Path] = None) -> List[Declaration]:
    """Collect marked declarations from an already parsed module.

    Args:
        tree (ast.Module): Parsed module.
        module (str): Dotted module name.
        file_path (Optional[Path]): Source file, used for locations only.

    Returns:
        List[Declaration]: Marked declarations in source order.
    """
    module_type = (module.rsplit(".", 1)[-1],)
    return list(_collect(tree.body, (), module, module_type, file_path))


def _collect(body: List[ast.stmt], class_stack: Tuple[str, ...], module: str,
             module_type: Tuple[str, ...], file_path: Optional[Path]) -> Iterator[Declaration]:
    enclosing = class_stack or module_type

    def declaration(name, kind, line, type_node=None, marker=None):
        return Declaration(
            name=name,
            kind=kind,
            enclosing_type=enclosing,
            type_name=ast.unparse(type_node) if type_node is not None else None,
            resource_path=_payload(marker) if marker is not None else None,
            module=module,
            file_path=file_path,
            line=line
        )

    for node in body:
        if isinstance(node, ast.ClassDef):
            for marker in _decorator_markers(node):
                yield declaration(node.name, DeclarationKind.TYPE, node.lineno, marker=marker)
            yield from _collect(node.body, class_stack + (node.name,), module, module_type, file_path)

        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            for marker in _decorator_markers(node):
                yield declaration(node.name, DeclarationKind.METHOD, node.lineno, marker=marker)
            for arg in _all_arguments(node.args):
                if arg.annotation is None:
                    continue
                type_node, marker = split_annotation(arg.annotation)
                if marker is not None:
                    yield declaration(arg.arg, DeclarationKind.PARAMETER, arg.lineno, type_node, marker)

        elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            type_node, marker = split_annotation(node.annotation)
            if marker is None:
                marker = _marker_call(node.value)
            if marker is not None:
                kind = DeclarationKind.FIELD if class_stack else DeclarationKind.VARIABLE
                yield declaration(node.target.id, kind, node.lineno, type_node, marker)

        elif isinstance(node, ast.Assign):
            # Unannotated assignments are discovered so they can be rejected by type
            marker = _marker_call(node.value)
            if marker is not None and len(node.targets) == 1 and isinstance(node.targets[0], ast.Name):
                kind = DeclarationKind.FIELD if class_stack else DeclarationKind.VARIABLE
                yield declaration(node.targets[0].id, kind, node.lineno, marker=marker)

        elif isinstance(node, ast.If):
            yield from _collect(node.body + node.orelse, class_stack, module, module_type, file_path)

        elif isinstance(node, ast.Try):
            nested = node.body + node.orelse + node.finalbody
            for handler in node.handlers:
                nested = nested + handler.body
            yield from _collect(nested, class_stack, module, module_type, file_path)

        elif isinstance(node, (ast.With, ast.AsyncWith)):
            yield from _collect(node.body, class_stack, module, module_type, file_path)

        elif isinstance(node, (ast.For, ast.AsyncFor, ast.While)):
            yield from _collect(node.body + node.orelse, class_stack, module, module_type, file_path)

        elif isinstance(node, _MATCH_NODES):
            nested = [stmt for case in node.cases for stmt in case.body]
            yield from _collect(nested, class_stack, module, module_type, file_path)


def split_annotation(annotation: ast.expr) -> Tuple[Optional[ast.expr], Optional[ast.Call]]:
    """Split an annotation into its declared type and marker call.

    ``Annotated[str, FileStream("a.txt")]`` yields the ``str`` node and the
    ``FileStream`` call. ``ClassVar`` and ``Final`` wrappers are removed and
    quoted annotations are parsed.

    Args:
        annotation (ast.expr): Annotation expression.

    Returns:
        Tuple[Optional[ast.expr], Optional[ast.Call]]: Declared type and marker, either may be None.
    """
    node = _unwrap_qualifiers(_parse_quoted(annotation))
    if isinstance(node, ast.Subscript) and _tail_name(node.value) == "Annotated":
        elements = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
        if not elements:
            return None, None
        declared = _unwrap_qualifiers(_parse_quoted(elements[0]))
        for metadata in elements[1:]:
            marker = _marker_call(metadata)
            if marker is not None:
                return declared, marker
        return declared, None
    return node, None


def _parse_quoted(node: ast.expr) -> ast.expr:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        try:
            return ast.parse(node.value.strip(), mode="eval").body
        except SyntaxError:
            return node
    return node


def _unwrap_qualifiers(node: ast.expr) -> ast.expr:
    while isinstance(node, ast.Subscript) and _tail_name(node.value) in _QUALIFIER_NAMES:
        node = _parse_quoted(node.slice)
    return node


def _tail_name(node: ast.expr) -> Optional[str]:
    """Return the last identifier of ``Name`` / ``a.b.Name`` expressions."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _marker_call(node: Optional[ast.expr]) -> Optional[ast.Call]:
    if isinstance(node, ast.Call) and _tail_name(node.func) == MARKER_NAME:
        return node
    return None


def _decorator_markers(node: Union[ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef]) -> List[ast.Call]:
    return [call for call in map(_marker_call, node.decorator_list) if call is not None]


def _all_arguments(args: ast.arguments) -> List[ast.arg]:
    arguments = list(args.posonlyargs) + list(args.args) + list(args.kwonlyargs)
    if args.vararg is not None:
        arguments.append(args.vararg)
    if args.kwarg is not None:
        arguments.append(args.kwarg)
    return arguments


def _payload(marker: ast.Call) -> Optional[str]:
    """Return the marker's resource path when it is a string literal."""
    candidates = list(marker.args[:1]) + [kw.value for kw in marker.keywords if kw.arg == "path"]
    if not candidates:
        return None
    value = candidates[0]
    if isinstance(value, ast.Constant) and isinstance(value.value, str):
        return value.value
    return None
