#!/usr/bin/env python3

import subprocess
import unittest
from unittest import mock

from dcnregdump.version import detect_dcn_version

LOG = '''\
[    2.101412] [drm] amdgpu kernel modesetting enabled.
[    3.524151] [drm] Display Core v3.2.266 initialized on DCN 3.2.1
[    3.524187] [drm] DP-HDMI FRL PCON supported
'''


class VersionTests(unittest.TestCase):
    def test_detect(self):
        self.assertEqual(detect_dcn_version(LOG), '3.2.1')

    def test_last_wins(self):
        log = LOG + '[   90.000000] [drm] Display Core v3.2.266 initialized on DCN 3.1.4\n'

        self.assertEqual(detect_dcn_version(log), '3.1.4')

    def test_not_found(self):
        self.assertIsNone(detect_dcn_version('[    0.000000] Linux version 6.8.0\n'))
        self.assertIsNone(detect_dcn_version(''))

    def test_reads_kernel_log(self):
        res = subprocess.CompletedProcess(['dmesg'], 0, stdout=LOG, stderr='')

        with mock.patch('dcnregdump.version.subprocess.run', return_value=res) as run:
            self.assertEqual(detect_dcn_version(), '3.2.1')

        run.assert_called_once()

    def test_no_dmesg(self):
        with mock.patch('dcnregdump.version.subprocess.run', side_effect=FileNotFoundError('dmesg')):
            with self.assertLogs('dcnregdump.version', 'WARNING'):
                self.assertIsNone(detect_dcn_version())


if __name__ == '__main__':
    unittest.main()
