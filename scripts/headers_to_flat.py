#!/usr/bin/env python3

# Generate the pre-processed flat definition files (dcnXYZ_regs.txt,
# dcnXYZ_sh_mask.txt) from the driver headers in <defs-dir>/dcn_reg/.

import argparse
import os
import sys

import dcnregdump as dr
from dcnregdump.convert import write_flat
from dcnregdump.locator import flat_paths, header_paths

parser = argparse.ArgumentParser()
parser.add_argument('version', help='DCN version, e.g. 3.2.1')
parser.add_argument('--defs-dir', '-d', default='.', help='Definition directory')
parser.add_argument('--output', '-o', help='Output directory (default: defs-dir)')
args = parser.parse_args()

underscored = args.version.replace('.', '_')
offset_path, mask_path = header_paths(args.defs_dir, underscored)

if not os.path.isfile(offset_path):
    print(f'Error: {offset_path} not found', file=sys.stderr)
    sys.exit(1)

try:
    db = dr.HeaderDefinitionParser().load(offset_path, mask_path, name=f'DCN {args.version}')
except dr.DefinitionError as e:
    print(f'Error: {e}', file=sys.stderr)
    sys.exit(1)

regs_path, sh_mask_path = flat_paths(args.output or args.defs_dir, args.version.replace('.', ''))
write_flat(db, regs_path, sh_mask_path)

print(f'{regs_path}: {len(db)} registers')
print(f'{sh_mask_path}: {len(db.bitfields)} bit-fields')
