"""AST node definitions for ExprLang."""
from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


# ============================================================
# Operators
# ============================================================

class MathOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class CmpOp(Enum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="


# ============================================================
# Base
# ============================================================

@dataclass
class ASTNode:
    """Base for all AST nodes. Position is not part of node equality."""
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


@dataclass
class Expression(ASTNode):
    """Base for expressions."""
    pass


# ============================================================
# Leaves
# ============================================================

@dataclass
class NumberLiteral(Expression):
    value: float = 0.0


@dataclass
class BoolLiteral(Expression):
    value: bool = False


@dataclass
class Var(Expression):
    """Plain (read-only) identifier reference."""
    name: str = ""


@dataclass
class UserVar(Expression):
    """`$name` read."""
    name: str = ""


# ============================================================
# Compound expressions
# ============================================================

@dataclass
class Block(Expression):
    """`{ a; b; ret }`: every expression but the last is discarded."""
    exprs: list[Expression] = field(default_factory=list)
    ret: Expression = field(default_factory=Expression)


@dataclass
class IfElse(Expression):
    cond: Expression = field(default_factory=Expression)
    yes: Expression = field(default_factory=Expression)
    no: Expression = field(default_factory=Expression)


@dataclass
class Call(Expression):
    name: str = ""
    args: list[Expression] = field(default_factory=list)


@dataclass
class Assign(Expression):
    name: str = ""
    value: Expression = field(default_factory=Expression)


@dataclass
class MathAssign(Expression):
    op: MathOp = MathOp.ADD
    name: str = ""
    value: Expression = field(default_factory=Expression)


@dataclass
class Negate(Expression):
    operand: Expression = field(default_factory=Expression)


@dataclass
class Not(Expression):
    operand: Expression = field(default_factory=Expression)


@dataclass
class MathBinOp(Expression):
    op: MathOp = MathOp.ADD
    left: Expression = field(default_factory=Expression)
    right: Expression = field(default_factory=Expression)


@dataclass
class CompareOp(Expression):
    op: CmpOp = CmpOp.EQUAL
    left: Expression = field(default_factory=Expression)
    right: Expression = field(default_factory=Expression)


# ============================================================
# Rendering
# ============================================================

def _payload(node: ASTNode):
    """Yield (name, value) for the structural fields of a node."""
    for f in fields(node):
        if f.name in ("line", "column"):
            continue
        yield f.name, getattr(node, f.name)


def ast_to_dict(node: Any) -> Any:
    """Convert a tree to plain dicts/lists so it can be JSON encoded."""
    if isinstance(node, ASTNode):
        d = {"type": node.__class__.__name__}
        for name, value in _payload(node):
            d[name] = ast_to_dict(value)
        return d
    if isinstance(node, list):
        return [ast_to_dict(n) for n in node]
    if isinstance(node, Enum):
        return node.value
    return node


def _label(node: ASTNode) -> str:
    parts = []
    for name, value in _payload(node):
        if isinstance(value, Enum):
            parts.append(value.value)
        elif not isinstance(value, (ASTNode, list)):
            parts.append(repr(value))
    label = node.__class__.__name__
    if parts:
        label += " " + " ".join(parts)
    return label


def format_tree(node: ASTNode, indent: str = "  ") -> str:
    """Render a tree one node per line, children indented under parents."""
    lines: list[str] = []

    def walk(n: ASTNode, depth: int, prefix: str = ""):
        lines.append(f"{indent * depth}{prefix}{_label(n)}")
        for name, value in _payload(n):
            if isinstance(value, ASTNode):
                walk(value, depth + 1, f"{name}: ")
            elif isinstance(value, list):
                lines.append(f"{indent * (depth + 1)}{name}: [{'' if value else ']'}")
                for child in value:
                    walk(child, depth + 2)
                if value:
                    lines.append(f"{indent * (depth + 1)}]")

    walk(node, 0)
    return "\n".join(lines)
