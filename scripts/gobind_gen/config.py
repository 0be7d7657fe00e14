"""
Generator configuration

Library-specific knobs for type filtering, naming and helper functions
referenced by the generated Go code.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from .errors import ConfigError


@dataclass(frozen=True)
class GenConfig:
    """Configuration for a binding generation run"""
    library_prefix: str = 'cef'
    native_package: str = 'C'
    trampoline_prefix: str = 'gocef_'
    callback_macro: str = 'CEF_CALLBACK'
    annotation_delimiter: str = "':'"
    reserved_names: frozenset[str] = frozenset({'range', 'select', 'type'})
    reserved_escape: str = '_'

    # Go helpers provided by the hand-written part of the bindings
    set_string_helper: str = 'setCEFStr'
    string_helper: str = 'cefstrToString'
    userfree_string_helper: str = 'cefuserfreestrToString'

    # String buffer types with special marshalling
    string_type: str = 'cef_string_t'
    userfree_string_type: str = 'cef_string_userfree_t'

    # Embedded base members that the bindings never expose
    base_struct_types: frozenset[str] = field(
        default_factory=lambda: frozenset({'cef_base_ref_counted_t', 'cef_base_scoped_t'}))

    @property
    def struct_prefix(self) -> str:
        """Prefix stripped from 'struct _<lib>_...' references"""
        return f'struct _{self.library_prefix}_'

    @property
    def type_prefix(self) -> str:
        """Prefix of canonical C type names"""
        return f'{self.library_prefix}_'

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: 'GenConfig | None' = None) -> 'GenConfig':
        """Overlay a dict (e.g. parsed from JSON) onto a base config"""
        base = base or cls()
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f'unknown config keys: {", ".join(sorted(unknown))}')
        values = dict(data)
        for key in ('reserved_names', 'base_struct_types'):
            if key in values:
                values[key] = frozenset(values[key])
        return replace(base, **values)
