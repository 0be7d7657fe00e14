"""
IR (Intermediate Representation) module

Holds the declarations handed over by the header scanner and the struct/enum
registries consulted while lowering types.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional
import json
import logging

from .codegen import as_pascal_case
from .config import GenConfig
from .errors import RegistryError
from .types import filter_c_type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """Source position of a declaration"""
    file: str = ''
    line: int = 0

    def __str__(self) -> str:
        if not self.file:
            return f'line {self.line}'
        return f'{self.file}:{self.line}'


@dataclass(frozen=True)
class Declaration:
    """One struct member as produced by the header scanner"""
    name: str
    type: str
    position: Position = Position()


@dataclass
class StructInfo:
    """Struct type information"""
    name: str
    go_name: str = ''
    declarations: list[Declaration] = field(default_factory=list)
    class_equivalent: bool = False

    def is_class_equivalent(self) -> bool:
        """Ref-counted/virtual-table struct, as opposed to a plain value struct"""
        return self.class_equivalent


@dataclass
class EnumInfo:
    """Enum type information"""
    name: str


class Registry:
    """Known structs and enums of the wrapped library"""

    def __init__(self, config: GenConfig, structs: list[StructInfo], enums: list[EnumInfo],
                 translator: Optional[Callable[[str], str]] = None):
        self.config = config
        self._translator = translator
        self._structs: dict[str, StructInfo] = {}
        self._enums: dict[str, EnumInfo] = {e.name: e for e in enums}

        seen: dict[str, str] = {}
        for struct in structs:
            if not struct.go_name:
                struct.go_name = self.translate_struct_type_name(struct.name)
            other = seen.get(struct.go_name)
            if other is not None and other != struct.name:
                raise RegistryError(
                    'NAME_COLLISION',
                    f'{other} and {struct.name} both translate to Go type {struct.go_name}')
            seen[struct.go_name] = struct.name
            self._structs[struct.name] = struct

        logger.debug('registry: %d structs, %d enums', len(self._structs), len(self._enums))

    @classmethod
    def load(cls, json_path: str, config: Optional[GenConfig] = None) -> 'Registry':
        """Load a registry from a JSON dump of the header scanner output"""
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data, config)

    @classmethod
    def from_dict(cls, data: dict[str, Any], config: Optional[GenConfig] = None,
                  translator: Optional[Callable[[str], str]] = None) -> 'Registry':
        """Create a registry from a dictionary"""
        config = config or GenConfig()
        structs = []
        enums = []
        try:
            for decl in data.get('structs', []):
                structs.append(cls._parse_struct(decl, config))
            for decl in data.get('enums', []):
                enums.append(EnumInfo(name=decl['name']))
        except (KeyError, TypeError) as exc:
            raise RegistryError('INVALID_REGISTRY', f'malformed registry data: {exc!r}') from exc
        return cls(config, structs, enums, translator)

    @staticmethod
    def _parse_struct(decl: dict, config: GenConfig) -> StructInfo:
        """Parse struct declaration"""
        file = decl.get('file', '')
        declarations = [
            Declaration(
                name=f['name'],
                type=f['type'],
                position=Position(file, int(f.get('line', 0))),
            )
            for f in decl.get('fields', [])
        ]
        class_equivalent = decl.get('class_equivalent')
        if class_equivalent is None:
            class_equivalent = Registry.has_base_member(declarations, config)
        return StructInfo(
            name=decl['name'],
            go_name=decl.get('go_name', ''),
            declarations=declarations,
            class_equivalent=bool(class_equivalent),
        )

    @staticmethod
    def has_base_member(declarations: list[Declaration], config: GenConfig) -> bool:
        """Check for a leading 'base' member of a ref-counted/scoped base type"""
        if not declarations:
            return False
        first = declarations[0]
        return first.name == 'base' and filter_c_type_name(first.type, config) in config.base_struct_types

    def translate_struct_type_name(self, name: str) -> str:
        """Map a canonical C struct name to its Go type name"""
        if self._translator is not None:
            return self._translator(name)
        return as_pascal_case(name, self.config.type_prefix)

    def get_struct(self, name: str) -> Optional[StructInfo]:
        """Get struct by canonical C name"""
        return self._structs.get(name)

    def is_struct_type(self, type_name: str) -> bool:
        """Check if type is a known struct"""
        return type_name in self._structs

    def is_enum_type(self, type_name: str) -> bool:
        """Check if type is a known enum"""
        return type_name in self._enums

    def structs(self) -> list[StructInfo]:
        """Registered structs in registration order"""
        return list(self._structs.values())
