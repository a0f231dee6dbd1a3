#!/usr/bin/env python3

import os
import unittest

import dcnregdump as dr

from _testdata import make_memory_file

VALUES = {
    0x0: 0x12345678,
    0x4: 0xdeadbeef,
    0x1000: 0x00000001,
    0x1ffc: 0xcafef00d,
}

SIZE = 0x2000


class ContextManagerTests(unittest.TestCase):
    def setUp(self):
        self.path = make_memory_file(VALUES, SIZE)

    def tearDown(self):
        os.unlink(self.path)

    def test(self):
        with dr.MMapTarget(self.path, 0, SIZE) as map:
            self.assertEqual(map.read32(4), 0xdeadbeef)

        with self.assertRaises(ValueError):
            map.read32(4)


class MmapTests(unittest.TestCase):
    def setUp(self):
        self.path = make_memory_file(VALUES, SIZE)
        self.map = dr.MMapTarget(self.path, 0, SIZE)

    def tearDown(self):
        self.map.close()
        os.unlink(self.path)

    def test_reads(self):
        map = self.map

        self.assertEqual(map.read32(0x0), 0x12345678)
        self.assertEqual(map.read32(0x4), 0xdeadbeef)
        self.assertEqual(map.read32(0x8), 0)
        self.assertEqual(map.read32(0x1ffc), 0xcafef00d)

    def test_little_endian(self):
        map = self.map

        # bytes 78 56 34 12 ef be ad de
        self.assertEqual(map.read32(0x2), 0xbeef1234)
        self.assertEqual(map.read32(0x1), 0xef123456)

    def test_fixed_width(self):
        self.assertFalse(hasattr(self.map, 'read'))
        self.assertFalse(hasattr(self.map, 'data_size'))

        with self.assertRaises(TypeError):
            dr.MMapTarget(self.path, 0, SIZE, 4)

    def test_out_of_range(self):
        with self.assertRaisesRegex(RuntimeError, 'Access outside mmap area'):
            self.map.read32(SIZE)

        with self.assertRaisesRegex(RuntimeError, 'Access outside mmap area'):
            self.map.read32(SIZE - 2)


class OffsetTests(unittest.TestCase):
    def setUp(self):
        self.path = make_memory_file(VALUES, SIZE)

    def tearDown(self):
        os.unlink(self.path)

    def test_unaligned_window(self):
        # The window need not start at a page boundary, addresses stay absolute
        with dr.MMapTarget(self.path, 0x1000 - 0x10, 0x20) as map:
            self.assertEqual(map.read32(0x1000), 1)

            with self.assertRaisesRegex(RuntimeError, 'Access outside mmap area'):
                map.read32(0x0)

            with self.assertRaisesRegex(RuntimeError, 'Access outside mmap area'):
                map.read32(0x1010)

    def test_page_window(self):
        with dr.MMapTarget(self.path, 0x1000, 0x1000) as map:
            self.assertEqual(map.read32(0x1000), 1)
            self.assertEqual(map.read32(0x1ffc), 0xcafef00d)

    def test_file_object(self):
        with open(self.path, 'rb') as f:
            with dr.MMapTarget(f, 0, SIZE) as map:
                self.assertEqual(map.read32(0), 0x12345678)

    def test_bad_length(self):
        with self.assertRaises(ValueError):
            dr.MMapTarget(self.path, 0, 0)


if __name__ == '__main__':
    unittest.main()
