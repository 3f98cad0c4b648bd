"""Shared helpers for working with the Tree/Token nodes the parser produces.

The AST is made of Lark's own node classes: statements and compound
expressions are `Tree`s labelled by node kind, while identifiers and
literals are bare `Token`s whose type names the kind.
"""
from __future__ import annotations
from typing import List, Optional, Union

from lark import Token, Tree
from typing_extensions import TypeAlias, TypeGuard


Node: TypeAlias = Union[Tree, Token]


def is_tree(node: object) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: object) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: Node) -> Optional[str]:
    return node.data if is_tree(node) else None

def token_kind(node: Node) -> Optional[str]:
    return str(node.type) if is_token(node) else None

def tree_children(node: Node) -> List[Node]:
    if not is_tree(node):
        return []

    children = getattr(node, "children", None)
    if children is None:
        return []

    return list(children)

def node_kind(node: Node) -> str:
    """Discriminator shared by trees and tokens: tree label or token type."""
    if is_tree(node):
        return str(node.data)

    return str(node.type)

def node_position(node: Node) -> tuple[Optional[int], Optional[int]]:
    """Line/column of the leftmost token under `node`, if any."""
    if is_token(node):
        return getattr(node, "line", None), getattr(node, "column", None)

    for child in tree_children(node):
        line, column = node_position(child)
        if line is not None:
            return line, column

    return None, None

# ---------------- Debug rendering ----------------

def render(node: Node) -> str:
    """Render a node the way diagnostics quote source: `fn(x) { x + 2 }` body -> `(x + 2)`."""
    if is_token(node):
        return str(node.value)

    children = tree_children(node)

    match node.data:
        case 'program' | 'block':
            return "".join(render(c) for c in children)
        case 'let_stmt':
            name, value = children
            return f"let {render(name)} = {render(value)};"
        case 'return_stmt':
            if not children:
                return "return ;"
            return f"return {render(children[0])};"
        case 'expr_stmt':
            return render(children[0]) if children else ""
        case 'prefix':
            op, operand = children
            return f"({op}{render(operand)})"
        case 'infix':
            left, op, right = children
            return f"({render(left)} {op} {render(right)})"
        case 'if_expr':
            text = f"if{render(children[0])} {render(children[1])}"
            if len(children) > 2:
                text += f"else {render(children[2])}"
            return text
        case 'fn_literal':
            params, body = children
            return f"fn({render_params(params)}) {render(body)}"
        case 'call':
            callee, args = children
            return f"{render(callee)}({', '.join(render(a) for a in tree_children(args))})"
        case 'array':
            return "[" + ", ".join(render(c) for c in children) + "]"
        case 'index':
            left, index = children
            return f"({render(left)}[{render(index)}])"

    return " ".join(render(c) for c in children)

def render_params(params: Node) -> str:
    return ", ".join(str(p) for p in tree_children(params))
