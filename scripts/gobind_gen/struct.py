"""
Struct binding generation module

Generates member declarations and the toNative/fromNative conversion
statements for data members of value structs.
"""

from typing import TYPE_CHECKING

from .codegen import split_ptr_type, strip_const
from .expr import (
    AddrOf, Assign, Call, Convert, ExprStmt, Name, Selector, Stmt,
    method_call, native_type,
)

if TYPE_CHECKING:
    from .config import GenConfig
    from .field import FieldDef
    from .ir import Registry


class StructGenerator:
    """Generates Go <-> C conversions for struct data members"""

    GO_VALUE = 'd'
    NATIVE_VALUE = 'native'

    def __init__(self, registry: 'Registry', config: 'GenConfig'):
        self.registry = registry
        self.config = config

    def _is_value_struct(self, c_type: str) -> bool:
        sdef = self.registry.get_struct(strip_const(c_type))
        return sdef is not None and not sdef.is_class_equivalent()

    def _go_member(self, field: 'FieldDef') -> Selector:
        return Selector(Name(self.GO_VALUE), field.go_name)

    def _native_member(self, field: 'FieldDef') -> Selector:
        return Selector(Name(self.NATIVE_VALUE), field.name)

    def declare_field(self, field: 'FieldDef') -> str:
        """Member line of the Go struct type"""
        if field.function_ptr:
            return ''
        return f'{field.go_name} {field.go_return_type}'

    def to_native(self, field: 'FieldDef') -> Stmt:
        """Copy the Go member into the C struct"""
        go, native = self._go_member(field), self._native_member(field)
        if self._is_value_struct(field.c_return_type):
            return ExprStmt(method_call(go, 'toNative', AddrOf(native)))

        c_type = strip_const(field.c_return_type)
        if c_type == 'void *':
            return Assign(native, go)
        elif c_type == self.config.string_type:
            return ExprStmt(Call(Name(self.config.set_string_helper), (go, AddrOf(native))))
        elif c_type == self.config.string_type + ' *':
            return ExprStmt(Call(Name(self.config.set_string_helper), (go, native)))
        base, ptrs = split_ptr_type(c_type)
        return Assign(native, Convert(native_type(self.config.native_package, base, ptrs), go))

    def from_native(self, field: 'FieldDef') -> Stmt:
        """Copy the C struct member into the Go value"""
        go, native = self._go_member(field), self._native_member(field)
        if self._is_value_struct(field.c_return_type):
            return ExprStmt(method_call(go, 'fromNative', AddrOf(native)))

        c_type = strip_const(field.c_return_type)
        if c_type == 'void *':
            return Assign(go, native)
        elif c_type == self.config.string_type:
            return Assign(go, Call(Name(self.config.string_helper), (AddrOf(native),)))
        elif c_type == self.config.string_type + ' *':
            return Assign(go, Call(Name(self.config.string_helper), (native,)))
        return Assign(go, Convert(field.go_return_type, native))
