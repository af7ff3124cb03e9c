import numpy as np

from rotormachine.machine import ALPHABET


def gen_swap_dict(elements: list, n_swaps: int, seed):
    elements = elements.copy()
    if 2 * n_swaps > len(elements):
        raise ValueError(f'cannot make {n_swaps} swaps out of {len(elements)} elements')
    rng = np.random.default_rng(seed)

    # random first ends of the pairs
    firsts = rng.choice(elements, size=n_swaps, replace=False).tolist()
    for el in firsts:
        elements.remove(el)

    # random second ends
    seconds = rng.choice(elements, size=n_swaps, replace=False).tolist()
    for el in seconds:
        elements.remove(el)

    # and the ones that stay unconnected
    leftover = elements

    swap_dict = dict()
    for first, second in zip(firsts, seconds):
        swap_dict[first] = second
        swap_dict[second] = first
    for el in leftover:
        swap_dict[el] = el
    return swap_dict


def random_rotor_wiring(seed: int) -> str:
    connected = np.random.default_rng(seed).permutation(len(ALPHABET))
    return ''.join(ALPHABET.symbol(int(i)) for i in connected)


def random_reflector_wiring(seed: int) -> str:
    """
    reflector wiring where every letter is paired with a different one
    """
    n_chars = len(ALPHABET)
    swap_dict = gen_swap_dict(list(range(n_chars)), n_chars // 2, seed)
    return ''.join(ALPHABET.symbol(swap_dict[i]) for i in range(n_chars))
