import logging
import string

import numpy as np

from rotormachine.errors import ConfigurationError, InternalInvariantError

logger = logging.getLogger(__name__)


class Alphabet:
    """
    fixed ordered set of symbols with O(1) symbol <-> rank lookup.
    only the 26 uppercase latin letters are supported.
    """
    def __init__(self, symbols: str = string.ascii_uppercase):
        if symbols != string.ascii_uppercase:
            raise ConfigurationError(f'only the alphabet {string.ascii_uppercase} is supported, got {symbols}')
        self.symbols = symbols
        self.n_symbols = len(symbols)

        self.char_to_number_map = dict()
        for i, char in enumerate(self.symbols):
            self.char_to_number_map[char] = i

    def __len__(self):
        return self.n_symbols

    def __contains__(self, symbol) -> bool:
        return symbol in self.char_to_number_map

    @property
    def first(self) -> str:
        return self.symbols[0]

    def rank(self, symbol: str) -> int:
        try:
            return self.char_to_number_map[symbol]
        except KeyError:
            raise ConfigurationError(f'symbol {symbol!r} is not in the alphabet') from None

    def symbol(self, rank: int) -> str:
        return self.symbols[rank % self.n_symbols]

    def ranks(self, wiring: str) -> np.ndarray:
        """
        convert a wiring string into a dense array of ranks.
        :raises ConfigurationError: if the wiring is not a permutation of the alphabet
        """
        if not isinstance(wiring, str):
            raise ConfigurationError(f'wiring must be a string, got {type(wiring).__name__}')
        if len(wiring) != self.n_symbols:
            raise ConfigurationError(f'wiring {wiring!r} has {len(wiring)} symbols, expected {self.n_symbols}')
        ranks = np.array([self.rank(char) for char in wiring], dtype=np.int64)
        # each rank 0..25 has to appear exactly once
        if not np.array_equal(np.sort(ranks), np.arange(self.n_symbols)):
            duplicates = sorted({char for char in wiring if wiring.count(char) > 1})
            raise ConfigurationError(f'wiring {wiring!r} is not a permutation, repeated symbols: {duplicates}')
        return ranks


ALPHABET = Alphabet()

# only the ascii letters change case, str.upper would also map e.g. dotless i to I
TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class Rotor:
    def __init__(self, wiring: str, position: str = 'A'):
        self.alphabet = ALPHABET
        self.n_positions = len(self.alphabet)
        self.wiring = wiring

        # who is connected to who at offset 0, and the way back
        self.connected_forward = self.alphabet.ranks(wiring)
        self.connected_backward = np.argsort(self.connected_forward)

        self.initial_position = self._check_position(position)
        self.offset = self.alphabet.rank(self.initial_position)

    def _check_position(self, position) -> str:
        if not isinstance(position, str) or len(position) != 1 or position not in self.alphabet:
            raise ConfigurationError(f'rotor position must be a single alphabet symbol, got {position!r}')
        return position

    @property
    def position(self) -> str:
        return self.alphabet.symbol(self.offset)

    def rotate_return_carryover(self, n_steps: int) -> int:
        div, mod = divmod(self.offset + n_steps, self.n_positions)
        self.offset = mod
        return div

    def reset(self):
        self.offset = self.alphabet.rank(self.initial_position)

    def forward(self, input_: int) -> int:
        return int(self.connected_forward[(input_ + self.offset) % self.n_positions])

    def inverse(self, input_: int) -> int:
        return int((self.connected_backward[input_] - self.offset) % self.n_positions)

    def __repr__(self):
        return f'Rotor(wiring={self.wiring!r}, position={self.position!r})'


class Reflector:
    def __init__(self, wiring: str):
        self.alphabet = ALPHABET
        self.wiring = wiring
        self.connections = self.alphabet.ranks(wiring)

        n_chars = len(self.alphabet)
        if not np.array_equal(self.connections[self.connections], np.arange(n_chars)):
            broken = [self.alphabet.symbol(i) for i in range(n_chars)
                      if self.connections[self.connections[i]] != i]
            raise ConfigurationError(f'reflector wiring {wiring!r} is not self-inverse at {broken}')

    def reflect(self, input_: int) -> int:
        return int(self.connections[input_])

    def __repr__(self):
        return f'Reflector(wiring={self.wiring!r})'


class Machine:
    """
    rotor cipher machine: a stack of rotors and a reflector.

    the signal of every letter runs through the rotors in list order, gets reflected and runs back in reverse order.
    before each letter the first rotor advances by one position; whenever a rotor wraps around to 'A' the next one
    advances as well.
    because of the reflector, encrypting the ciphertext from the same initial positions gives back the plain text.

    a machine is not thread safe, every call of `encrypt` moves the rotors.
    """
    def __init__(self, rotor_wirings, reflector_wiring: str, initial_positions):
        self.alphabet = ALPHABET

        rotor_wirings = list(rotor_wirings)
        initial_positions = list(initial_positions)
        if len(rotor_wirings) == 0:
            raise ConfigurationError('a machine needs at least one rotor')
        if len(initial_positions) != len(rotor_wirings):
            raise ConfigurationError(f'got {len(initial_positions)} initial positions '
                                     f'for {len(rotor_wirings)} rotors')

        rotors = [Rotor(wiring, position) for wiring, position in zip(rotor_wirings, initial_positions)]
        reflector = Reflector(reflector_wiring)

        # only assign once everything validated
        self.rotors = rotors
        self.reflector = reflector
        logger.debug('built machine with %d rotors at positions %s', len(self.rotors), self.positions)

    @classmethod
    def from_config(cls, config):
        return cls(config.rotor_wirings, config.reflector_wiring, config.initial_positions)

    @property
    def positions(self) -> list:
        return [rot.position for rot in self.rotors]

    @property
    def initial_positions(self) -> list:
        return [rot.initial_position for rot in self.rotors]

    def step(self):
        # first rotor always gets rotated, the others only on carryover
        rot_step = 1
        for rot in self.rotors:
            rot_step = rot.rotate_return_carryover(rot_step)
            if not rot_step:
                break

    def encode_forward(self, number: int) -> int:
        for rot in self.rotors:
            number = rot.forward(number)
        return number

    def encode_backward(self, number: int) -> int:
        for rot in reversed(self.rotors):
            number = rot.inverse(number)
        return number

    def reflect(self, number: int) -> int:
        return self.reflector.reflect(number)

    def encode_rank(self, number: int) -> int:
        """
        send one letter through the machine at the current rotor positions, without stepping.
        """
        output = self.encode_backward(self.reflect(self.encode_forward(number)))
        if self.encode_backward(self.reflect(self.encode_forward(output))) != number:
            raise InternalInvariantError(f'signal path is not self-inverse for rank {number} '
                                         f'at positions {self.positions}')
        return output

    def encrypt(self, text: str) -> str:
        """
        encrypt (or decrypt, it is the same operation) a text.
        ascii letters are upper cased, any other character (including non-ascii letters) is passed through unchanged
        and does not move the rotors.
        """
        output = []
        for symbol in text.translate(TO_UPPER):
            if symbol not in self.alphabet:
                output.append(symbol)
                continue
            self.step()
            number = self.encode_rank(self.alphabet.rank(symbol))
            output.append(self.alphabet.symbol(number))
        return ''.join(output)

    def reset(self):
        for rot in self.rotors:
            rot.reset()
        logger.debug('reset rotors to %s', self.positions)

    def __repr__(self):
        return f'Machine(n_rotors={len(self.rotors)}, positions={self.positions})'
