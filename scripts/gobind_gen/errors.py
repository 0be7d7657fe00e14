"""
Generator errors

Every error here is fatal for a generation run: the bindings are produced
all at once or not at all.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .ir import Position


VALID_ERROR_CODES = {
    'MALFORMED_PARAMS',
    'NAME_COLLISION',
    'INVALID_REGISTRY',
    'INVALID_CONFIG',
}


class GeneratorError(Exception):
    """Base class for generator input errors"""

    def __init__(self, code: str, message: str):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f'Unknown generator error code: {code}')
        super().__init__(message)
        self.code = code
        self.message = message


class DeclarationError(GeneratorError):
    """A header declaration the generator cannot handle"""

    def __init__(self, declaration: str, position: Optional['Position'] = None,
                 code: str = 'MALFORMED_PARAMS'):
        where = f'{position}: ' if position is not None else ''
        super().__init__(code, f"{where}Can't handle params in type: {declaration}")
        self.declaration = declaration
        self.position = position


class RegistryError(GeneratorError):
    """Inconsistent struct/enum registry or configuration"""


class ConfigError(GeneratorError):
    """Invalid generator configuration"""

    def __init__(self, message: str):
        super().__init__('INVALID_CONFIG', message)
