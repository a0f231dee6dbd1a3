"""Tests for conversion of definitions to the flat form."""

from __future__ import annotations

import os
import tempfile
import unittest

import dcnregdump as dr
from dcnregdump.convert import flat_mask_lines, flat_offset_lines, write_flat

from _testdata import DATA_DIR


def load_header(version):
    return dr.HeaderDefinitionParser().load(
        os.path.join(DATA_DIR, 'dcn_reg', f'dcn_{version}_offset.h'),
        os.path.join(DATA_DIR, 'dcn_reg', f'dcn_{version}_sh_mask.h'))


class ConvertTests(unittest.TestCase):
    def test_offset_lines(self):
        db = dr.RegisterDatabase([
            dr.RegisterRecord('regA_CNTL', 0x12, 2),
            dr.RegisterRecord('regB_CNTL', None, 1),
            dr.RegisterRecord('regC_CNTL', 0x3, None),
        ])

        self.assertEqual(flat_offset_lines(db), [
            'regA_CNTL=0x0012',
            'regA_CNTL_BASE_IDX=2',
            'regB_CNTL=',
            'regB_CNTL_BASE_IDX=1',
            'regC_CNTL=0x0003',
        ])

    def test_mask_lines(self):
        db = dr.RegisterDatabase([], [
            dr.BitFieldRecord('A_CNTL__EN', 0x1, 0),
            dr.BitFieldRecord('A_CNTL__SEL', None, 4),
            dr.BitFieldRecord('A_CNTL__ERR', 0x80000000, None),
        ])

        self.assertEqual(flat_mask_lines(db), [
            'A_CNTL__EN__SHIFT=0x0',
            'A_CNTL__EN_MASK=0x00000001',
            'A_CNTL__SEL__SHIFT=0x4',
            'A_CNTL__ERR_MASK=0x80000000',
        ])

    def test_header_to_flat(self):
        for version in ['3_2_1', '3_0_1']:
            with self.subTest(version=version), tempfile.TemporaryDirectory() as tmpdir:
                db = load_header(version)
                regs_path = os.path.join(tmpdir, 'regs.txt')
                mask_path = os.path.join(tmpdir, 'sh_mask.txt')

                write_flat(db, regs_path, mask_path)

                flat_db = dr.FlatDefinitionParser().load(regs_path, mask_path)

                self.assertEqual(flat_db, db)
                self.assertEqual(flat_db.prefix, db.prefix)

    def test_written_files_are_located(self):
        db = load_header('3_2_1')

        with tempfile.TemporaryDirectory() as tmpdir:
            write_flat(db, os.path.join(tmpdir, 'dcn321_regs.txt'),
                       os.path.join(tmpdir, 'dcn321_sh_mask.txt'))

            src = dr.find_definition_source('3.2.1', tmpdir)

            self.assertEqual(src.format, dr.DefinitionFormat.Flat)
            self.assertEqual(src.load(), db)


if __name__ == '__main__':
    unittest.main()
