"""Command-line interface for dcnregdump."""

from __future__ import annotations

import argparse
import logging
import os
import sys

import tabulate

from .config import DumpConfig
from .dump import RegisterDumper
from .errors import (
    DcnRegDumpError,
    DefinitionsNotFound,
    NoDeviceFound,
)
from .locator import available_versions, find_definition_source
from .mmaptarget import MMapTarget
from .pci import find_amd_display_device
from .report import print_table_report, print_text_report
from .sections import DEFAULT_SECTIONS, select_sections
from .version import detect_dcn_version

logger = logging.getLogger(__name__)

# Size of the register window when --base is given without --size
DEFAULT_WINDOW_SIZE = 0x80000


def _int(s: str) -> int:
    try:
        return int(s, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid number: {s!r}') from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='dcnregdump',
        description='Dump and decode AMD GPU DCN display registers',
    )
    parser.add_argument('-d', '--defs-dir', metavar='DIR',
                        help='Register definition directory (default: $DCNREGDUMP_DEFS_DIR or cwd)')
    parser.add_argument('-V', '--dcn-version', metavar='X.Y.Z',
                        help='DCN version (default: detect from kernel log)')
    parser.add_argument('-m', '--mem', metavar='FILE',
                        help='Physical memory file to map (default: /dev/mem)')
    parser.add_argument('-b', '--base', type=_int, metavar='ADDR',
                        help='Register BAR address, skips PCI device discovery')
    parser.add_argument('--size', type=_int, metavar='SIZE',
                        help=f'Register window size with --base (default: {DEFAULT_WINDOW_SIZE:#x})')
    parser.add_argument('-s', '--section', action='append', metavar='TITLE',
                        help='Dump only this section, may be given multiple times')
    parser.add_argument('-f', '--format', choices=['text', 'table'], default='text',
                        help='Report format (default: text)')
    parser.add_argument('--tui', action='store_true', help='Browse the dump interactively')
    parser.add_argument('--list-versions', action='store_true',
                        help='List DCN versions with header definitions and exit')
    parser.add_argument('--list-sections', action='store_true',
                        help='List register sections and exit')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity')

    args = parser.parse_args(argv)

    if args.size is not None and args.base is None:
        parser.error('--size requires --base')

    return args


def make_config(args: argparse.Namespace) -> DumpConfig:
    config = DumpConfig()
    if args.defs_dir:
        config.defs_dir = args.defs_dir
    if args.mem:
        config.mem_path = args.mem
    return config


def _setup_logging(verbosity: int):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, stream=sys.stderr,
                        format='%(levelname)s: %(name)s: %(message)s')


def _fatal(msg: str, details: list[str] | None = None):
    print(f'Error: {msg}', file=sys.stderr)
    for line in details or []:
        print(line, file=sys.stderr)
    sys.exit(1)


def _ask_version(defs_dir: str) -> str:
    print('Warning: Could not detect DCN version from kernel log.')
    print('Available header files:')
    for v in available_versions(defs_dir):
        print(v)

    try:
        return input('Please enter DCN version (e.g., 3.2.1): ').strip()
    except EOFError:
        return ''


def main(argv: list[str] | None = None):
    args = parse_args(argv)

    _setup_logging(args.verbose)

    config = make_config(args)

    if args.list_sections:
        print(tabulate.tabulate([(s.title, s.pattern) for s in DEFAULT_SECTIONS],
                                ['Section', 'Pattern']))
        return

    if args.list_versions:
        for v in available_versions(config.defs_dir):
            print(v)
        return

    try:
        sections = select_sections(args.section)
    except KeyError as e:
        _fatal(f'Unknown section {e.args[0]!r}',
               ['Known sections: ' + ', '.join(s.title for s in DEFAULT_SECTIONS)])

    if config.mem_path == '/dev/mem' and os.geteuid() != 0:
        _fatal('This program must be run as root!')

    if args.base is not None:
        device_base = args.base
        window_size = args.size if args.size is not None else DEFAULT_WINDOW_SIZE
    else:
        try:
            dev = find_amd_display_device(config.sysfs_pci_root)
        except NoDeviceFound as e:
            _fatal(str(e))
        print(f'Found AMD GPU at {dev.bdf}')
        print(f'Using BAR{dev.bar_index} at {dev.bar_start:#x}')
        device_base = dev.bar_start
        window_size = dev.bar_size

    version = args.dcn_version or detect_dcn_version()
    if not version:
        version = _ask_version(config.defs_dir)
        if not version:
            _fatal('No DCN version given')
    print(f'Detected DCN version: {version}')

    try:
        src = find_definition_source(version, config.defs_dir)
        print(f'Offset file:  {src.offset_path}')
        print(f'SH mask file: {src.mask_path}')
        db = src.load()
    except DefinitionsNotFound as e:
        _fatal(str(e), ['Available header files:'] + e.available)
    except DcnRegDumpError as e:
        _fatal(str(e))

    print(f'Register prefix: {db.prefix.value}')

    try:
        target = MMapTarget(config.mem_path, device_base, window_size)
    except (OSError, ValueError) as e:
        _fatal(f'Cannot map {config.mem_path} at {device_base:#x}: {e}')

    with target:
        dumper = RegisterDumper(db, target, device_base)

        if args.tui:
            from .tui.app import DcnRegDumpApp

            app = DcnRegDumpApp(dumper, sections, source=src)
            app.run()
        elif args.format == 'table':
            print_table_report(dumper.dump(sections))
        else:
            print_text_report(dumper.dump(sections))
