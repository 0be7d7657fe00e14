"""
gobind_gen - Go (cgo) binding generation framework for C libraries

This framework turns C struct member declarations into Go declarations,
call adapters, struct conversions and C trampolines. It is designed to be
configured by library-specific modules that supply naming conventions,
string helpers and registries.
"""

from .config import GenConfig
from .errors import GeneratorError, DeclarationError, RegistryError, ConfigError
from .ir import Registry, StructInfo, EnumInfo, Declaration, Position
from .types import TypeConverter, CMapping, C_MAPPINGS, filter_c_type_name
from .field import FieldDef, new_field
from .codegen import CodeGen
from .call import CallGenerator
from .struct import StructGenerator
from .callback import TrampolineGenerator
from .generator import Generator, StructBindings

__all__ = [
    'GenConfig',
    'GeneratorError', 'DeclarationError', 'RegistryError', 'ConfigError',
    'Registry', 'StructInfo', 'EnumInfo', 'Declaration', 'Position',
    'TypeConverter', 'CMapping', 'C_MAPPINGS', 'filter_c_type_name',
    'FieldDef', 'new_field',
    'CodeGen',
    'CallGenerator',
    'StructGenerator',
    'TrampolineGenerator',
    'Generator', 'StructBindings',
]
