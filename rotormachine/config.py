import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# rotors I, II, III and reflector B of the wehrmacht machine
DEFAULT_ROTORS = [
    'EKMFLGDQVZNTOWYHXUSPAIBRCJ',
    'AJDKSIRUXBLHWTMCQGZNPYFVOE',
    'BDFHJLCPRTXVZNYEIWGAKMUSQO',
]
DEFAULT_REFLECTOR = 'YRUHQSLDPXNGOKMIEBFZCWVJAT'


class MachineConfig(BaseModel):
    """
    wiring and start positions of a machine. only the shape is checked here,
    the machine itself decides whether the wirings are valid.
    """
    rotor_wirings: List[str] = Field(default_factory=lambda: list(DEFAULT_ROTORS), min_length=1)
    reflector_wiring: str = DEFAULT_REFLECTOR
    initial_positions: List[str] = Field(default_factory=list)

    @field_validator('rotor_wirings', 'initial_positions')
    @classmethod
    def _upper_list(cls, v: List[str]) -> List[str]:
        return [item.strip().upper() for item in v]

    @field_validator('reflector_wiring')
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode='after')
    def _default_positions(self) -> 'MachineConfig':
        # all rotors start at 'A' unless told otherwise
        if not self.initial_positions:
            self.initial_positions = ['A'] * len(self.rotor_wirings)
        return self


def split_wirings(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


def split_positions(value: str) -> List[str]:
    value = value.strip()
    if ',' in value:
        return split_wirings(value)
    # 'ABC' is a shorthand for three positions
    return list(value)


@lru_cache(maxsize=1)
def load_config() -> MachineConfig:
    """
    machine config from the ROTORMACHINE_* environment variables, a .env file is read first.
    """
    load_dotenv()

    kwargs = dict()
    rotors = os.getenv('ROTORMACHINE_ROTORS')
    if rotors:
        kwargs['rotor_wirings'] = split_wirings(rotors)
    reflector = os.getenv('ROTORMACHINE_REFLECTOR')
    if reflector:
        kwargs['reflector_wiring'] = reflector
    positions = os.getenv('ROTORMACHINE_POSITIONS')
    if positions:
        kwargs['initial_positions'] = split_positions(positions)
    return MachineConfig(**kwargs)
