#!/usr/bin/env python3

import unittest

import dcnregdump as dr


class AddressTests(unittest.TestCase):
    def test_hdmi_control(self):
        r = dr.RegisterRecord('regHDMI_CONTROL', 0x1234, 2)

        addr = dr.resolve_address(r, 0x1000_0000)

        self.assertEqual(addr, 0x1000_0000 + 4 * (0x34c0 + 0x1234))
        self.assertEqual(addr, 0x1001_1BD0)

    def test_base_table(self):
        self.assertEqual(dict(dr.DCN_BASE_TABLE), {1: 0xc0, 2: 0x34c0, 3: 0x9000})

        self.assertEqual(dr.resolve_address(dr.RegisterRecord('regA', 0x40, 1), 0), 0x400)
        self.assertEqual(dr.resolve_address(dr.RegisterRecord('regA', 0, 3), 0x100), 0x100 + 0x24000)

    def test_custom_table(self):
        r = dr.RegisterRecord('mmA', 0x10, 0)
        self.assertEqual(dr.resolve_address(r, 0x1000, {0: 0x12}), 0x1000 + 4 * 0x22)

    def test_undefined(self):
        for r in (dr.RegisterRecord('regA', None, 2),
                  dr.RegisterRecord('regA', 0x10, None),
                  dr.RegisterRecord('regA', None, None),
                  dr.RegisterRecord('regA', 0x10, 4)):
            with self.assertRaises(dr.UndefinedRegister) as cm:
                dr.resolve_address(r, 0x1000_0000)
            self.assertEqual(cm.exception.name, 'regA')

    def test_pure(self):
        r = dr.RegisterRecord('regA', 0x10, 2)
        table = dict(dr.DCN_BASE_TABLE)

        a1 = dr.resolve_address(r, 0x1000, table)
        a2 = dr.resolve_address(r, 0x1000, table)

        self.assertEqual(a1, a2)
        self.assertEqual(r, dr.RegisterRecord('regA', 0x10, 2))
        self.assertEqual(table, dict(dr.DCN_BASE_TABLE))


if __name__ == '__main__':
    unittest.main()
