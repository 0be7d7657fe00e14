"""
Call adaptation module

Generates the Go side of a call through a C function pointer: the Go
parameter list, argument conversions and result unwrapping.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .codegen import split_ptr_type, strip_const
from .expr import (
    AddrOf, Assign, Block, Call, CompositeLit, Convert, Define, Deref, Expr, ExprStmt,
    Index, Name, ParamDecl, ParamList, RangeLoop, Return, Selector, Stmt, VarDecl,
    method_call, native_type,
)

if TYPE_CHECKING:
    from .config import GenConfig
    from .field import FieldDef
    from .ir import Registry


@dataclass(frozen=True)
class NativeParam:
    """C parameter split into base type and pointer suffix"""
    type: str
    ptrs: str = ''

    @classmethod
    def parse(cls, c_param: str) -> 'NativeParam':
        base, ptrs = split_ptr_type(strip_const(c_param))
        return cls(type=base, ptrs=ptrs)


class CallGenerator:
    """Generates Go wrappers around C function pointer members"""

    RECEIVER = 'd'

    def __init__(self, registry: 'Registry', config: 'GenConfig'):
        self.registry = registry
        self.config = config

    def _native(self, base: str, ptrs: str = '') -> str:
        return native_type(self.config.native_package, base, ptrs)

    def _zero_literal(self, c_type: str) -> tuple[Expr, ...]:
        """Conversion target for toNative(); class-equivalent structs take none"""
        sdef = self.registry.get_struct(c_type)
        if sdef is None or sdef.is_class_equivalent():
            return ()
        return (AddrOf(CompositeLit(self._native(c_type))),)

    def parameter_list(self, field: 'FieldDef') -> ParamList:
        """Go parameters, receiver excluded; a type is written at the end of each run"""
        if not field.function_ptr:
            return ParamList()
        params: list[ParamDecl] = []
        count = 0
        receiver = '*' + field.owner.go_name
        for i, p in enumerate(field.go_params):
            if i == 0 and p == receiver:
                continue
            count += 1
            last_of_run = i == len(field.go_params) - 1 or field.go_params[i + 1] != p
            params.append(ParamDecl(f'p{count}', p if last_of_run else None))
        return ParamList(tuple(params))

    def call_function_pointer(self, field: 'FieldDef') -> Block:
        """Body of the Go method invoking the function pointer"""
        params = [NativeParam.parse(p) for p in field.c_params]
        prefix: list[Stmt] = []
        for i, p in enumerate(params):
            if i != 0:
                prefix.extend(self._prepare_arg(i, p))

        args: list[Expr] = []
        if params:
            args.append(method_call(Name(self.RECEIVER), 'toNative'))
        for i, p in enumerate(params):
            if i != 0:
                args.append(self._pass_arg(i, p))
        args.append(Selector(Name(self.RECEIVER), field.name))
        call = Call(Selector(Name(self.config.native_package), field.trampoline_name), tuple(args))

        return Block(tuple(prefix) + self._unwrap_result(field, call))

    def _prepare_arg(self, i: int, p: NativeParam) -> list[Stmt]:
        """Statements that must run before the call for argument i"""
        arg: Expr = Name(f'p{i}')
        if p.type == self.config.string_type:
            value = arg
            for _ in p.ptrs:
                value = Deref(value)
            return [
                VarDecl(f's{i}', self._native(p.type)),
                ExprStmt(Call(Name(self.config.set_string_helper), (value, AddrOf(Name(f's{i}'))))),
            ]
        elif p.ptrs == '**':
            if self.registry.is_struct_type(p.type):
                return [Define(f'pd{i}', method_call(Deref(arg), 'toNative', *self._zero_literal(p.type)))]
            elif p.type == 'char':
                return self._string_array(i)
        elif p.ptrs == '*':
            if self.registry.is_enum_type(p.type):
                return [Define(f'e{i}', Convert(self._native(p.type), Deref(arg)))]
        return []

    def _string_array(self, i: int) -> list[Stmt]:
        """Copy a []string into a calloc'ed array of C strings"""
        pkg = Name(self.config.native_package)
        size_t = self._native('size_t')
        cp = Name(f'cp{i}')
        tp = Name(f'tp{i}')
        return [
            Define(cp.text, Call(Selector(pkg, 'calloc'), (
                Convert(size_t, Call(Name('len'), (Name(f'p{i}'),))),
                Convert(size_t, Call(Selector(Name('unsafe'), 'Sizeof'), (Call(Name('uintptr'), (Name('0'),)),))),
            ))),
            Define(tp.text, Convert(f'*[1<<30 - 1]{self._native("char", "*")}', cp)),
            RangeLoop('i', 'one', Name(f'p{i}'), (
                Assign(Index(tp, Name('i')), Call(Selector(pkg, 'CString'), (Name('one'),))),
            )),
        ]

    def _pass_arg(self, i: int, p: NativeParam) -> Expr:
        """Expression handed to the trampoline for argument i"""
        arg = Name(f'p{i}')
        if p.type == 'void':
            return arg
        elif p.type == self.config.string_type:
            return AddrOf(Name(f's{i}'))
        elif p.type == 'char' and p.ptrs == '**':
            return Convert(self._native('char', '**'), Name(f'cp{i}'))
        if p.ptrs == '*' and self.registry.is_enum_type(p.type):
            return AddrOf(Name(f'e{i}'))
        if self.registry.is_struct_type(p.type):
            if len(p.ptrs) > 1:
                return AddrOf(Name(f'pd{i}'))
            return method_call(arg, 'toNative', *self._zero_literal(p.type))
        return Convert(self._native(p.type, p.ptrs), arg)

    def _unwrap_result(self, field: 'FieldDef', call: Call) -> tuple[Stmt, ...]:
        """Turn the native result into the Go return value"""
        if field.go_return_type == '':
            return (ExprStmt(call),)

        c_type = strip_const(field.c_return_type)
        sdef = self.registry.get_struct(c_type)
        if sdef is not None and not sdef.is_class_equivalent():
            return (
                Define('native', call),
                VarDecl('result', field.go_return_type),
                ExprStmt(method_call(Name('result'), 'fromNative', AddrOf(Name('native')))),
                Return(Name('result')),
            )

        if c_type == self.config.string_type:
            return (
                Define('native', call),
                Return(Call(Name(self.config.string_helper), (AddrOf(Name('native')),))),
            )
        elif c_type == self.config.string_type + ' *':
            return (Return(Call(Name(self.config.string_helper), (call,))),)
        elif c_type == self.config.userfree_string_type:
            return (Return(Call(Name(self.config.userfree_string_helper), (call,))),)
        return (Return(Convert(field.go_return_type, call)),)
