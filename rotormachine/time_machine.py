import random
import string
import time

import tqdm

from rotormachine.machine import Machine
from rotormachine.wiring import random_reflector_wiring, random_rotor_wiring


def time_encryption(n_messages: int = 3000, chars_per_message: int = 256, seed: int = 41,
                    disable_tqdm: bool = False) -> float:
    """
    average time in seconds to encrypt one message of `chars_per_message` random letters
    """
    charset = string.ascii_uppercase
    rotor_seeds = [21, 32, 34]
    rotors = [random_rotor_wiring(rotor_seed) for rotor_seed in rotor_seeds]
    reflector = random_reflector_wiring(3)
    rotor_positions = ['D', 'E', 'H']

    encoder = Machine(rotors, reflector, rotor_positions)

    rng = random.Random(seed)
    messages = [''.join(rng.choices(charset, k=chars_per_message)) for _ in range(n_messages)]
    tick = time.perf_counter()
    for message in tqdm.tqdm(messages, disable=disable_tqdm):
        encoder.reset()
        encoder.encrypt(message)
    tock = time.perf_counter()

    return (tock - tick) / n_messages


if __name__ == '__main__':
    chars_per_message = 256
    avg_time = time_encryption(chars_per_message=chars_per_message)
    print(f'Average encoding time for message with {chars_per_message} characters: {avg_time:.2e} seconds')
