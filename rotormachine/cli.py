"""
command line front end for the rotor machine.

    rotormachine "attack at dawn"                  # rotors I, II, III at AAA
    rotormachine --positions Q,E,V "attack at dawn"
    rotormachine --rotors EKMFLGDQVZNTOWYHXUSPAIBRCJ --reflector YRUHQSLDPXNGOKMIEBFZCWVJAT hello
    rotormachine --demo
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from rotormachine.config import MachineConfig, load_config, split_positions, split_wirings
from rotormachine.errors import ConfigurationError
from rotormachine.machine import Machine

logger = logging.getLogger(__name__)

DEMO_TEXT = 'hello enigma'


def _build_config(args: argparse.Namespace) -> MachineConfig:
    base = load_config()
    rotor_wirings = split_wirings(args.rotors) if args.rotors else list(base.rotor_wirings)
    reflector_wiring = args.reflector or base.reflector_wiring
    if args.positions:
        initial_positions = split_positions(args.positions)
    elif args.rotors:
        # new rotors start at 'A'
        initial_positions = []
    else:
        initial_positions = list(base.initial_positions)
    return MachineConfig(rotor_wirings=rotor_wirings,
                         reflector_wiring=reflector_wiring,
                         initial_positions=initial_positions)


def run_demo(machine: Machine) -> list:
    ciphertext = machine.encrypt(DEMO_TEXT)
    machine.reset()
    plaintext = machine.encrypt(ciphertext)
    machine.reset()
    return [f'Encrypted text: {ciphertext}', f'Decrypted text: {plaintext}']


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='encrypt or decrypt text with a rotor cipher machine')
    parser.add_argument('text', nargs='*', help='text to encrypt (decrypting is the same operation)')
    parser.add_argument('--rotors', default=None, help='comma separated rotor wirings, fastest rotor first')
    parser.add_argument('--reflector', default=None, help='reflector wiring')
    parser.add_argument('--positions', default=None, help="initial rotor positions, e.g. 'A,B,C' or 'ABC'")
    parser.add_argument('--demo', action='store_true', help='encrypt, reset and decrypt a sample text')
    parser.add_argument('--verbose', '-v', action='store_true', help='log at debug level')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                        datefmt='%H:%M:%S')

    try:
        machine = Machine.from_config(_build_config(args))
    except (ConfigurationError, ValidationError) as exc:
        logger.error('invalid machine configuration: %s', exc)
        return 2

    if args.demo:
        for line in run_demo(machine):
            print(line)
        return 0

    if not args.text:
        parser.error('no text given (or use --demo)')

    print(machine.encrypt(' '.join(args.text)))
    logger.debug('rotor positions after encryption: %s', machine.positions)
    return 0


if __name__ == '__main__':
    sys.exit(main())
