#!/usr/bin/env python3

import os
import tempfile
import unittest

import dcnregdump as dr
from dcnregdump.pci import find_amd_display_device, read_bars

EMPTY_BAR = '0x0000000000000000 0x0000000000000000 0x0000000000000000\n'


def make_device(root, bdf, vendor, pci_class, bars):
    devdir = os.path.join(root, bdf)
    os.makedirs(devdir)

    with open(os.path.join(devdir, 'vendor'), 'w') as f:
        f.write(f'0x{vendor:04x}\n')
    with open(os.path.join(devdir, 'class'), 'w') as f:
        f.write(f'0x{pci_class:06x}\n')

    if bars is None:
        return

    with open(os.path.join(devdir, 'resource'), 'w') as f:
        for bar in bars:
            if bar is None:
                f.write(EMPTY_BAR)
            else:
                start, size = bar
                f.write(f'0x{start:016x} 0x{start + size - 1:016x} 0x0000000000040200\n')
        # expansion ROM and bridge windows, never a register BAR
        f.write('0x00000000fce00000 0x00000000fce1ffff 0x0000000000046200\n')


class PciTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = self.tmpdir.name

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_last_populated_bar(self):
        make_device(self.root, '0000:00:00.0', 0x8086, 0x060000, [(0xf0000000, 0x1000)] + [None] * 5)
        make_device(self.root, '0000:03:00.0', 0x1002, 0x030000,
                    [(0xd0000000, 0x10000000), None, (0xe0000000, 0x200000), None,
                     None, (0xfcd00000, 0x80000)])

        dev = find_amd_display_device(self.root)

        self.assertEqual(dev.bdf, '0000:03:00.0')
        self.assertEqual(dev.bar_index, 5)
        self.assertEqual(dev.bar_start, 0xfcd00000)
        self.assertEqual(dev.bar_size, 0x80000)

    def test_trailing_empty_bars(self):
        make_device(self.root, '0000:0a:00.0', 0x1002, 0x038000,
                    [(0xc0000000, 0x10000000), None, (0xfc800000, 0x80000), None, None, None])

        dev = find_amd_display_device(self.root)

        self.assertEqual(dev.bar_index, 2)
        self.assertEqual(dev.bar_start, 0xfc800000)

    def test_non_display_amd_device_ignored(self):
        # HD audio function of the same card
        make_device(self.root, '0000:03:00.1', 0x1002, 0x040300, [(0xfce00000, 0x4000)] + [None] * 5)

        with self.assertRaises(dr.NoDeviceFound):
            find_amd_display_device(self.root)

    def test_no_bars(self):
        make_device(self.root, '0000:03:00.0', 0x1002, 0x030000, [None] * 6)

        with self.assertRaises(dr.NoDeviceFound):
            find_amd_display_device(self.root)

    def test_no_resource_file(self):
        make_device(self.root, '0000:03:00.0', 0x1002, 0x030000, None)

        with self.assertRaisesRegex(dr.NoDeviceFound, 'Resource file not found'):
            find_amd_display_device(self.root)

    def test_missing_sysfs(self):
        with self.assertRaises(dr.NoDeviceFound):
            find_amd_display_device(os.path.join(self.root, 'nonexistent'))

    def test_read_bars(self):
        make_device(self.root, 'dev', 0x1002, 0x030000, [None, (0x1000, 0x100)] + [None] * 4)

        bars = read_bars(os.path.join(self.root, 'dev', 'resource'))

        self.assertEqual(bars, [(1, 0x1000, 0x100)])


if __name__ == '__main__':
    unittest.main()
