"""
Type conversion module

Filters raw C type text and lowers it to Go type text.
"""

import re
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

from .codegen import normalize_ptr_type, split_ptr_type, strip_const

if TYPE_CHECKING:
    from .config import GenConfig


@dataclass(frozen=True)
class CMapping:
    """C type name and its Go equivalent"""
    c: str
    go: str


C_MAPPINGS: tuple[CMapping, ...] = (
    CMapping('cef_string_t', 'string'),
    CMapping('cef_string_userfree_t', 'string'),
    CMapping('cef_string_userfree_utf8_t', 'string'),
    CMapping('cef_string_userfree_utf16_t', 'string'),
    CMapping('cef_string_userfree_wide_t', 'string'),
    CMapping('cef_string_utf8_t', 'string'),
    CMapping('cef_string_utf16_t', 'string'),
    CMapping('cef_string_wide_t', 'string'),
    CMapping('size_t', 'uint64'),
    CMapping('int', 'int32'),
    CMapping('float', 'float32'),
    CMapping('double', 'float64'),
    CMapping('char', 'byte'),
    CMapping('char16', 'int16'),
    CMapping('wchar_t', 'int16'),
    CMapping('int8_t', 'int8'),
    CMapping('uint8_t', 'uint8'),
    CMapping('int16_t', 'int16'),
    CMapping('uint16_t', 'uint16'),
    CMapping('int32_t', 'int32'),
    CMapping('uint32_t', 'uint32'),
    CMapping('int64_t', 'int64'),
    CMapping('uint64_t', 'uint64'),
    CMapping('int32', 'int32'),
    CMapping('uint32', 'uint32'),
    CMapping('int64', 'int64'),
    CMapping('uint64', 'uint64'),
    CMapping('uintptr_t', 'uintptr'),
)

# Words that qualify a type but never name one on their own
_QUALIFIERS = {'const', 'volatile', 'unsigned', 'signed', 'short', 'long', 'struct', 'enum', 'union'}
_IDENTIFIER_RE = re.compile(r'^[A-Za-z_]\w*$')


def filter_c_type_name(in_: str, config: 'GenConfig') -> str:
    """Canonicalize raw C type text

    Examples:
        const struct _cef_foo_t * -> cef_foo_t *
        size_t ':'unsigned long -> size_t
    """
    in_ = in_.strip()
    if in_.startswith('const ' + config.struct_prefix):
        in_ = in_[len('const struct _'):]
    elif in_.startswith(config.struct_prefix):
        in_ = in_[len('struct _'):]
    i = in_.find(config.annotation_delimiter)
    if i != -1:
        in_ = in_[:i]
    return normalize_ptr_type(in_)


def strip_declarator_name(type_str: str) -> str:
    """Drop a trailing parameter name, if any

    Examples:
        cef_foo_t * self -> cef_foo_t *
        int count -> int
        unsigned int -> unsigned int
    """
    tokens = type_str.split(' ')
    if len(tokens) < 2 or not _IDENTIFIER_RE.match(tokens[-1]):
        return type_str
    rest = tokens[:-1]
    if not any(t not in _QUALIFIERS and '*' not in t for t in rest):
        return type_str
    return ' '.join(rest)


class TypeConverter:
    """Lowers filtered C types to Go types"""

    def __init__(self, config: 'GenConfig', translate_struct_type_name: Callable[[str], str],
                 mappings: tuple[CMapping, ...] = C_MAPPINGS):
        self.config = config
        self.translate_struct_type_name = translate_struct_type_name
        self._mappings = {m.c: m.go for m in mappings}

    def filter_c_type_name(self, in_: str) -> str:
        """Canonicalize raw C type text"""
        return filter_c_type_name(in_, self.config)

    def filter_param_type(self, in_: str) -> str:
        """Canonicalize a parameter declaration, dropping its name"""
        return strip_declarator_name(self.filter_c_type_name(in_))

    def lookup(self, c_type: str) -> str | None:
        """Look up a base type in the mapping table"""
        return self._mappings.get(c_type)

    def derive_go_type(self, in_: str) -> tuple[str, bool]:
        """Map a filtered C type to Go type text

        Returns (go_type, needs_unsafe). An empty go_type means void.
        """
        in_ = strip_const(in_)
        if in_ == 'void':
            return '', False
        elif in_ == 'void *':
            return 'unsafe.Pointer', True
        elif in_ == 'void **':
            return '*unsafe.Pointer', True
        elif in_ == 'char **':
            # marshalled through a calloc'ed array sized with unsafe.Sizeof
            return '[]string', True

        base, suffix = split_ptr_type(in_)
        go = self.lookup(base)
        if go is not None:
            return suffix + go, False
        return suffix + self.translate_struct_type_name(base), False
