"""
CEF binding configuration

Configures the binding generator with CEF-specific customizations:
- cef_string_t marshalling through the setCEFStr/cefstrToString helpers
- gocef_ trampoline names and the CEF_CALLBACK calling convention
- ref-counted base structs implemented by hand
"""

from typing import Any, Optional

from gobind_gen import GenConfig, Generator, Registry


CEF_CONFIG = GenConfig(
    library_prefix='cef',
    native_package='C',
    trampoline_prefix='gocef_',
    callback_macro='CEF_CALLBACK',
    set_string_helper='setCEFStr',
    string_helper='cefstrToString',
    userfree_string_helper='cefuserfreestrToString',
    string_type='cef_string_t',
    userfree_string_type='cef_string_userfree_t',
)

# Implemented by hand in the Go package
HAND_WRITTEN = (
    'cef_base_ref_counted_t',
    'cef_base_scoped_t',
)


def load_registry(data: dict[str, Any], overrides: Optional[dict[str, Any]] = None) -> Registry:
    """Build the CEF registry from the header scanner output"""
    config = GenConfig.from_dict(overrides, CEF_CONFIG) if overrides else CEF_CONFIG
    return Registry.from_dict(data, config)


def configure(gen: Generator):
    """Configure generator with CEF-specific settings"""
    gen.ignore(*HAND_WRITTEN)
