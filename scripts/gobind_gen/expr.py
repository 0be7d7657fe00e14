"""
Go expression tree

Emitters build these nodes; text is produced only by render().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class Expr(ABC):
    """Base class for Go expressions"""

    @abstractmethod
    def render(self) -> str:
        pass

    def __str__(self) -> str:
        return self.render()


class Stmt(ABC):
    """Base class for Go statements"""

    @abstractmethod
    def render(self) -> str:
        pass

    def __str__(self) -> str:
        return self.render()


def native_type(package: str, base: str, ptrs: str = '') -> str:
    """Type text of a C type seen from Go, e.g. *C.int"""
    return f'{ptrs}{package}.{base}'


# ==============================================================================
# Expressions
# ==============================================================================

@dataclass(frozen=True)
class Name(Expr):
    """Identifier or literal"""
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Selector(Expr):
    """value.attr"""
    value: Expr
    attr: str

    def render(self) -> str:
        if isinstance(self.value, Deref):
            return f'({self.value.render()}).{self.attr}'
        return f'{self.value.render()}.{self.attr}'


@dataclass(frozen=True)
class Call(Expr):
    """func(args...)"""
    func: Expr
    args: tuple[Expr, ...] = ()

    def render(self) -> str:
        return f'{self.func.render()}({", ".join(a.render() for a in self.args)})'


@dataclass(frozen=True)
class Convert(Expr):
    """Go type conversion, T(value) or (*T)(value)"""
    type: str
    value: Expr

    def render(self) -> str:
        if self.type.startswith('*'):
            return f'({self.type})({self.value.render()})'
        return f'{self.type}({self.value.render()})'


@dataclass(frozen=True)
class AddrOf(Expr):
    """&value"""
    value: Expr

    def render(self) -> str:
        return f'&{self.value.render()}'


@dataclass(frozen=True)
class Deref(Expr):
    """*value"""
    value: Expr

    def render(self) -> str:
        return f'*{self.value.render()}'


@dataclass(frozen=True)
class CompositeLit(Expr):
    """Zero-valued composite literal, T{}"""
    type: str

    def render(self) -> str:
        return f'{self.type}{{}}'


@dataclass(frozen=True)
class Index(Expr):
    """value[index]"""
    value: Expr
    index: Expr

    def render(self) -> str:
        return f'{self.value.render()}[{self.index.render()}]'


def method_call(receiver: Expr, method: str, *args: Expr) -> Call:
    """receiver.method(args...)"""
    return Call(Selector(receiver, method), tuple(args))


# ==============================================================================
# Statements
# ==============================================================================

@dataclass(frozen=True)
class ExprStmt(Stmt):
    """Expression evaluated for its side effects"""
    expr: Expr

    def render(self) -> str:
        return self.expr.render()


@dataclass(frozen=True)
class Define(Stmt):
    """name := value"""
    name: str
    value: Expr

    def render(self) -> str:
        return f'{self.name} := {self.value.render()}'


@dataclass(frozen=True)
class VarDecl(Stmt):
    """var name type"""
    name: str
    type: str

    def render(self) -> str:
        return f'var {self.name} {self.type}'


@dataclass(frozen=True)
class Assign(Stmt):
    """target = value"""
    target: Expr
    value: Expr

    def render(self) -> str:
        return f'{self.target.render()} = {self.value.render()}'


@dataclass(frozen=True)
class Return(Stmt):
    """return value"""
    value: Optional[Expr] = None

    def render(self) -> str:
        if self.value is None:
            return 'return'
        return f'return {self.value.render()}'


@dataclass(frozen=True)
class RangeLoop(Stmt):
    """for index, value := range iterable { body }"""
    index: str
    value: str
    iterable: Expr
    body: tuple[Stmt, ...]

    def render(self) -> str:
        lines = [f'for {self.index}, {self.value} := range {self.iterable.render()} {{']
        for stmt in self.body:
            lines.extend('\t' + one for one in stmt.render().split('\n'))
        lines.append('}')
        return '\n'.join(lines)


@dataclass(frozen=True)
class Block(Stmt):
    """Statement sequence"""
    statements: tuple[Stmt, ...] = ()

    def render(self) -> str:
        return '\n'.join(s.render() for s in self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def __bool__(self) -> bool:
        return bool(self.statements)


# ==============================================================================
# Declarations
# ==============================================================================

@dataclass(frozen=True)
class ParamDecl:
    """Parameter of a Go function signature; type omitted inside a run"""
    name: str
    type: Optional[str] = None

    def render(self) -> str:
        if self.type is None:
            return self.name
        return f'{self.name} {self.type}'


@dataclass(frozen=True)
class ParamList:
    """Go parameter list without the surrounding parentheses"""
    params: tuple[ParamDecl, ...] = ()

    def render(self) -> str:
        return ', '.join(p.render() for p in self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __iter__(self):
        return iter(self.params)
