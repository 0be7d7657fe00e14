"""
Code generation utilities

Provides helpers for generating Go and C code, and for taking C type
strings apart.
"""

import re


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self, indent_str: str = '\t'):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = indent_str  # gofmt indents with tabs

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def text(self, text: str):
        """Add a multi-line fragment, indenting every line"""
        for one in text.split('\n'):
            self.line(one)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


def as_camel_case(name: str) -> str:
    """Convert snake_case to CamelCase

    Examples:
        get_size -> GetSize
        is_valid -> IsValid
        x -> X
    """
    return ''.join(part[:1].upper() + part[1:] for part in name.split('_') if part)


def as_pascal_case(name: str, prefix: str) -> str:
    """Convert C type name to PascalCase, removing prefix and _t suffix

    Examples:
        cef_browser_host_t -> BrowserHost
        cef_base_ref_counted_t -> BaseRefCounted
    """
    if prefix and name.startswith(prefix):
        name = name[len(prefix):]
    if name.endswith('_t'):
        name = name[:-2]
    return as_camel_case(name)


def strip_const(type_str: str) -> str:
    """Remove every const qualifier"""
    return type_str.replace('const ', '')


def normalize_ptr_type(type_str: str) -> str:
    """Normalize pointer spacing to the 'T *' / 'T **' form"""
    # "cef_foo_t*" -> "cef_foo_t *", "char * *" -> "char **"
    type_str = re.sub(r'\s*((?:\*\s*)+)', lambda m: ' ' + m.group(1).replace(' ', '') + ' ', type_str)
    return ' '.join(type_str.split())


def split_ptr_type(type_str: str) -> tuple[str, str]:
    """Split a type at the first space into base type and suffix

    Examples:
        int -> ('int', '')
        cef_foo_t * -> ('cef_foo_t', '*')
        char ** -> ('char', '**')
    """
    i = type_str.find(' ')
    if i == -1:
        return type_str, ''
    return type_str[:i], type_str[i + 1:]


def split_params(params: str) -> list[str]:
    """Split a parameter list interior on top-level commas"""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(params):
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
        elif ch == ',' and depth == 0:
            parts.append(params[start:i])
            start = i + 1
    parts.append(params[start:])
    return parts


def is_balanced_group(text: str) -> bool:
    """Check that text is exactly one parenthesized group"""
    if not text.startswith('(') or not text.endswith(')'):
        return False
    depth = 0
    for i, ch in enumerate(text):
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
            if depth < 0:
                return False
            if depth == 0 and i != len(text) - 1:
                return False
    return depth == 0
