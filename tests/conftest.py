import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from gobind_gen import (  # noqa: E402
    CallGenerator,
    FieldDef,
    GenConfig,
    Position,
    Registry,
    StructGenerator,
    TrampolineGenerator,
    TypeConverter,
    new_field,
)
from gobind_gen.logging import get_logger  # noqa: E402

REGISTRY_DATA = {
    "structs": [
        {
            "name": "cef_foo_t",
            "file": "cef_foo_capi.h",
            "fields": [
                {"name": "base", "type": "cef_base_ref_counted_t", "line": 10},
                {"name": "get_size", "type": "size_t (*)(struct _cef_foo_t *self)", "line": 12},
                {"name": "set_rect", "type": "void (*)(struct _cef_foo_t *self, int x, int y, int z)", "line": 14},
            ],
        },
        {"name": "cef_browser_t", "class_equivalent": True, "fields": []},
        {
            "name": "cef_rect_t",
            "fields": [
                {"name": "x", "type": "int"},
                {"name": "y", "type": "int"},
                {"name": "width", "type": "int"},
                {"name": "height", "type": "int"},
            ],
        },
        {
            "name": "cef_settings_t",
            "file": "cef_types.h",
            "fields": [
                {"name": "size", "type": "size_t", "line": 3},
                {"name": "cache_path", "type": "cef_string_t", "line": 4},
                {"name": "user_data", "type": "void *", "line": 5},
                {"name": "bounds", "type": "cef_rect_t", "line": 6},
                {"name": "type", "type": "int", "line": 7},
            ],
        },
    ],
    "enums": [
        {"name": "cef_errorcode_t"},
        {"name": "cef_log_severity_t"},
    ],
}


@pytest.fixture
def config() -> GenConfig:
    return GenConfig()


@pytest.fixture
def registry(config: GenConfig) -> Registry:
    return Registry.from_dict(REGISTRY_DATA, config)


@pytest.fixture
def type_conv(config: GenConfig, registry: Registry) -> TypeConverter:
    return TypeConverter(config, registry.translate_struct_type_name)


@pytest.fixture
def make_field(registry: Registry, type_conv: TypeConverter) -> Callable[..., FieldDef]:
    def _make_field(name: str, type_info: str, owner: str = "cef_foo_t", line: int = 1) -> FieldDef:
        return new_field(registry.get_struct(owner), name, type_info, Position("test.h", line), type_conv)

    return _make_field


@pytest.fixture
def call_gen(registry: Registry, config: GenConfig) -> CallGenerator:
    return CallGenerator(registry, config)


@pytest.fixture
def struct_gen(registry: Registry, config: GenConfig) -> StructGenerator:
    return StructGenerator(registry, config)


@pytest.fixture
def trampoline_gen(config: GenConfig) -> TrampolineGenerator:
    return TrampolineGenerator(config)


@pytest.fixture
def clean_logger() -> Iterator[logging.Logger]:
    logger = get_logger()
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
