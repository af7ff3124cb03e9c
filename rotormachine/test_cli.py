import contextlib
import io
import os
import unittest as ut
from unittest import mock

from rotormachine import cli, config

IDENTITY = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
SHIFT_13 = 'NOPQRSTUVWXYZABCDEFGHIJKLM'


class CliTest(ut.TestCase):
    def setUp(self):
        env = {key: value for key, value in os.environ.items() if not key.startswith('ROTORMACHINE_')}
        patcher = mock.patch.dict(os.environ, env, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)
        # no .env lookups from the working directory
        dotenv_patcher = mock.patch.object(config, 'load_dotenv')
        dotenv_patcher.start()
        self.addCleanup(dotenv_patcher.stop)
        config.load_config.cache_clear()
        self.addCleanup(config.load_config.cache_clear)

    def run_cli(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            status = cli.main(argv)
        return status, out.getvalue()

    def test_encrypt(self):
        status, out = self.run_cli(['--rotors', IDENTITY, '--reflector', SHIFT_13, 'a'])
        self.assertEqual(status, 0)
        self.assertEqual(out.strip(), 'N')

    def test_round_trip_with_defaults(self):
        _, ciphertext = self.run_cli(['--positions', 'QEV', 'attack', 'at', 'dawn'])
        _, plaintext = self.run_cli(['--positions', 'Q,E,V', ciphertext.strip()])
        self.assertEqual(plaintext.strip(), 'ATTACK AT DAWN')

    def test_demo(self):
        status, out = self.run_cli(['--demo'])
        self.assertEqual(status, 0)
        lines = out.strip().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith('Encrypted text: '))
        self.assertEqual(lines[1], 'Decrypted text: HELLO ENIGMA')

    def test_invalid_configuration(self):
        with self.assertLogs('rotormachine.cli', level='ERROR'):
            status, out = self.run_cli(['--rotors', IDENTITY[:25], 'hello'])
        self.assertEqual(status, 2)
        self.assertEqual(out, '')

    def test_mismatched_positions(self):
        with self.assertLogs('rotormachine.cli', level='ERROR'):
            status, _ = self.run_cli(['--positions', 'AB', 'hello'])
        self.assertEqual(status, 2)

    def test_needs_text(self):
        with self.assertRaises(SystemExit):
            self.run_cli([])


if __name__ == '__main__':
    ut.main()
