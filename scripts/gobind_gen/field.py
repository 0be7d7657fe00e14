"""
Field model module

Builds the descriptor of one struct member (data member or function
pointer) from its raw C declaration.
"""

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from .codegen import as_camel_case, is_balanced_group, split_params
from .errors import DeclarationError
from .ir import Position

if TYPE_CHECKING:
    from .ir import StructInfo
    from .types import TypeConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDef:
    """Struct member descriptor"""
    owner: 'StructInfo'
    raw_name: str
    name: str
    go_name: str
    c_return_type: str
    go_return_type: str
    function_ptr: bool = False
    needs_unsafe: bool = False
    c_params: tuple[str, ...] = ()
    go_params: tuple[str, ...] = ()
    trampoline_name: str = ''
    skip: bool = False
    position: Position = Position()


def trampoline_name(owner_name: str, field_name: str, prefix: str, type_prefix: str) -> str:
    """Name of the C shim for a function pointer

    Example: cef_foo_t.get_size -> gocef_foo_get_size
    """
    if owner_name.startswith(type_prefix):
        owner_name = owner_name[len(type_prefix):]
    if owner_name.endswith('_t'):
        owner_name = owner_name[:-2]
    return f'{prefix}{owner_name}_{field_name}'


def new_field(owner: 'StructInfo', name: str, type_info: str, pos: Position,
              type_conv: 'TypeConverter') -> FieldDef:
    """Parse one member declaration into a FieldDef

    Raises DeclarationError when a function pointer's parameter list is not
    a single parenthesized group.
    """
    config = type_conv.config
    raw = type_info
    cut = type_info.find(config.annotation_delimiter)
    if cut != -1:
        type_info = type_info[:cut]
    declared = type_info
    escaped = config.reserved_escape + name if name in config.reserved_names else name

    fp = type_info.find('(*)')
    function_ptr = fp != -1
    if function_ptr:
        type_info = type_info[:fp]

    c_return_type = type_conv.filter_c_type_name(type_info)
    go_return_type, needs_unsafe = type_conv.derive_go_type(c_return_type)

    c_params: list[str] = []
    go_params: list[str] = []
    if function_ptr:
        params = declared[fp + 3:].strip()
        if not is_balanced_group(params):
            raise DeclarationError(raw, pos)
        inner = params[1:-1]
        if inner.strip() not in ('', 'void'):
            for one in split_params(inner):
                c_param = type_conv.filter_param_type(one)
                go_param, unsafe = type_conv.derive_go_type(c_param)
                needs_unsafe = needs_unsafe or unsafe
                c_params.append(c_param)
                go_params.append(go_param)

    field = FieldDef(
        owner=owner,
        raw_name=name,
        name=escaped,
        go_name=as_camel_case(name),
        c_return_type=c_return_type,
        go_return_type=go_return_type,
        function_ptr=function_ptr,
        needs_unsafe=needs_unsafe,
        c_params=tuple(c_params),
        go_params=tuple(go_params),
        trampoline_name=trampoline_name(owner.name, escaped, config.trampoline_prefix, config.type_prefix)
        if function_ptr else '',
        skip=name == 'base' and c_return_type in config.base_struct_types,
        position=pos,
    )
    logger.debug('%s.%s: %s -> %s', owner.name, name, declared, field.go_return_type or 'void')
    return field
