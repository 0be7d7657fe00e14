"""
Callback trampoline generation module

Generates the C shims through which Go invokes a struct's function pointer
members: each shim takes the member's parameters plus the callback itself
and forwards the call.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import GenConfig
    from .field import FieldDef


class TrampolineGenerator:
    """Generates C trampoline functions for function pointer members"""

    def __init__(self, config: 'GenConfig'):
        self.config = config

    def _arg_names(self, field: 'FieldDef') -> list[str]:
        return ['self' if i == 0 else f'p{i}' for i in range(len(field.c_params))]

    def signature(self, field: 'FieldDef') -> str:
        """C signature of the trampoline, without body"""
        names = self._arg_names(field)
        params = [f'{p} {name}' for p, name in zip(field.c_params, names)]
        callback_params = ', '.join(field.c_params) or 'void'
        params.append(f'{field.c_return_type} ({self.config.callback_macro} *callback)({callback_params})')
        return f'{field.c_return_type} {field.trampoline_name}({", ".join(params)})'

    def declaration(self, field: 'FieldDef') -> str:
        """Prototype for the cgo preamble"""
        if not field.function_ptr:
            return ''
        return self.signature(field) + ';'

    def generate(self, field: 'FieldDef') -> str:
        """Trampoline definition; empty for data members"""
        if not field.function_ptr:
            return ''
        forward = f'callback({", ".join(self._arg_names(field))});'
        if field.go_return_type != '':
            forward = 'return ' + forward
        return f'{self.signature(field)} {{ {forward} }}'
