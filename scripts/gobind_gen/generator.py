"""
Main generator module

Orchestrates all components to turn the registered structs into Go
binding fragments.
"""

from dataclasses import dataclass, field
import logging
import os
from typing import Callable, Optional, Sequence

from .call import CallGenerator
from .callback import TrampolineGenerator
from .codegen import CodeGen
from .config import GenConfig
from .errors import GeneratorError
from .expr import native_type
from .field import FieldDef, new_field
from .ir import Registry, StructInfo
from .struct import StructGenerator
from .types import TypeConverter

logger = logging.getLogger(__name__)


@dataclass
class StructBindings:
    """Generated fragments for one struct, assembled by the caller"""
    name: str
    go_name: str
    declaration: str = ''
    methods: list[str] = field(default_factory=list)
    conversions: str = ''
    trampolines: list[str] = field(default_factory=list)
    trampoline_declarations: list[str] = field(default_factory=list)
    needs_unsafe: bool = False


class Generator:
    """Main binding generator"""

    def __init__(self, registry: Registry, config: Optional[GenConfig] = None):
        self.registry = registry
        self.config = config or registry.config
        self.type_conv = TypeConverter(self.config, registry.translate_struct_type_name)
        self.call_gen = CallGenerator(registry, self.config)
        self.struct_gen = StructGenerator(registry, self.config)
        self.trampoline_gen = TrampolineGenerator(self.config)
        self._ignores: set[str] = set()
        self._hooks: list[Callable[[StructBindings], None]] = []

    def ignore(self, *names: str):
        """Add structs to skip"""
        self._ignores.update(names)

    def post_process(self, hook: Callable[[StructBindings], None]):
        """Register a hook run on every generated StructBindings"""
        self._hooks.append(hook)
        return hook

    def build_fields(self, struct: StructInfo) -> list[FieldDef]:
        """Build the descriptors of a struct's members"""
        return [new_field(struct, d.name, d.type, d.position, self.type_conv)
                for d in struct.declarations]

    def generate_struct(self, struct: StructInfo) -> StructBindings:
        """Generate all fragments for one struct"""
        fields = [f for f in self.build_fields(struct) if not f.skip]
        bindings = StructBindings(name=struct.name, go_name=struct.go_name)
        bindings.needs_unsafe = any(f.needs_unsafe for f in fields)
        data_fields = [f for f in fields if not f.function_ptr]
        func_fields = [f for f in fields if f.function_ptr]

        bindings.declaration = self._gen_declaration(struct, data_fields)
        bindings.conversions = self._gen_conversions(struct, data_fields)
        for f in func_fields:
            bindings.methods.append(self.render_method(f))
            bindings.trampolines.append(self.trampoline_gen.generate(f))
            bindings.trampoline_declarations.append(self.trampoline_gen.declaration(f))

        for hook in self._hooks:
            hook(bindings)
        logger.info('%s => %s (%d fields, %d methods)', struct.name, struct.go_name,
                    len(data_fields), len(func_fields))
        return bindings

    def generate_all(self) -> list[StructBindings]:
        """Generate fragments for every registered struct"""
        return [self.generate_struct(s) for s in self.registry.structs()
                if s.name not in self._ignores]

    def run(self) -> list[StructBindings]:
        """generate_all(), aborting the process on bad generator input"""
        try:
            return self.generate_all()
        except GeneratorError as exc:
            logger.critical('%s', exc.message)
            raise SystemExit(1) from exc

    def write(self, output_root: str, package: str, includes: Sequence[str] = (),
              basename: str = 'gen') -> list[str]:
        """Generate everything and write the Go file, C header and C source"""
        all_bindings = self.run()
        header = f'{basename}_trampolines.h'
        outputs = {
            f'{basename}_types.go': self.render_go_file(all_bindings, package, header),
            header: self.render_c_header(all_bindings, includes),
            f'{basename}_trampolines.c': self.render_c_source(all_bindings, header),
        }

        os.makedirs(output_root, exist_ok=True)
        written = []
        for name, content in outputs.items():
            path = os.path.join(output_root, name)
            with open(path, 'w', newline='\n') as f:
                f.write(content)
            logger.info('wrote %s', path)
            written.append(path)
        return written

    def render_go_file(self, all_bindings: list[StructBindings], package: str, header: str) -> str:
        """Go source holding every type, conversion and method"""
        gen = CodeGen()
        gen.line('// Code generated by gen_go.py. DO NOT EDIT.')
        gen.line()
        gen.line(f'package {package}')
        gen.line()
        gen.lines('/*', f'#include "{header}"', '*/', 'import "C"')
        if any(b.needs_unsafe for b in all_bindings):
            gen.line()
            gen.line('import "unsafe"')

        for b in all_bindings:
            for fragment in (b.declaration, b.conversions, *b.methods):
                if fragment:
                    gen.line()
                    gen.text(fragment)
        gen.line()
        return gen.output()

    def render_c_header(self, all_bindings: list[StructBindings], includes: Sequence[str]) -> str:
        """Trampoline prototypes, included from the cgo preamble"""
        gen = CodeGen()
        gen.line('/* machine generated, do not edit */')
        gen.line('#pragma once')
        gen.line('#include <stdlib.h>')
        for include in includes:
            gen.line(f'#include "{include}"')
        gen.line()
        for b in all_bindings:
            gen.lines(*b.trampoline_declarations)
        return gen.output() + '\n'

    def render_c_source(self, all_bindings: list[StructBindings], header: str) -> str:
        """Trampoline definitions"""
        gen = CodeGen()
        gen.line('/* machine generated, do not edit */')
        gen.line(f'#include "{header}"')
        gen.line()
        for b in all_bindings:
            gen.lines(*b.trampolines)
        return gen.output() + '\n'

    def render_method(self, f: FieldDef) -> str:
        """Go method calling a function pointer member"""
        gen = CodeGen()
        params = self.call_gen.parameter_list(f).render()
        ret = f' {f.go_return_type}' if f.go_return_type else ''
        with gen.block(f'func (d *{f.owner.go_name}) {f.go_name}({params}){ret} {{'):
            gen.text(self.call_gen.call_function_pointer(f).render())
        return gen.output()

    def _gen_declaration(self, struct: StructInfo, data_fields: list[FieldDef]) -> str:
        """Go type declaration"""
        native = native_type(self.config.native_package, struct.name)
        if struct.is_class_equivalent():
            return f'type {struct.go_name} {native}'
        gen = CodeGen()
        with gen.block(f'type {struct.go_name} struct {{'):
            for f in data_fields:
                gen.line(self.struct_gen.declare_field(f))
        return gen.output()

    def _gen_conversions(self, struct: StructInfo, data_fields: list[FieldDef]) -> str:
        """toNative/fromNative methods of a value struct"""
        native = native_type(self.config.native_package, struct.name, '*')
        gen = CodeGen()
        if struct.is_class_equivalent():
            with gen.block(f'func (d *{struct.go_name}) toNative() {native} {{'):
                gen.line(f'return ({native})(d)')
            return gen.output()
        with gen.block(f'func (d *{struct.go_name}) toNative(native {native}) {native} {{'):
            with gen.block('if d == nil {'):
                gen.line('return nil')
            for f in data_fields:
                gen.text(self.struct_gen.to_native(f).render())
            gen.line('return native')
        gen.line()
        with gen.block(f'func (d *{struct.go_name}) fromNative(native {native}) {{'):
            for f in data_fields:
                gen.text(self.struct_gen.from_native(f).render())
        return gen.output()
