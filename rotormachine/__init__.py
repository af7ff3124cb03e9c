from rotormachine.errors import ConfigurationError, InternalInvariantError
from rotormachine.machine import ALPHABET, Alphabet, Machine, Reflector, Rotor

__version__ = '0.1.0'

__all__ = [
    'ALPHABET',
    'Alphabet',
    'ConfigurationError',
    'InternalInvariantError',
    'Machine',
    'Reflector',
    'Rotor',
]
