from __future__ import annotations

import logging
import re
import subprocess

__all__ = [ 'detect_dcn_version', ]

logger = logging.getLogger(__name__)

_DCN_VERSION_RE = re.compile(r'initialized on DCN (\d+\.\d+\.\d+)')


def _read_kernel_log() -> str:
    try:
        res = subprocess.run(['dmesg'], capture_output=True, encoding='utf-8',
                             errors='replace', check=False)
    except OSError as e:
        logger.warning('Could not run dmesg: %s', e)
        return ''
    return res.stdout


def detect_dcn_version(log_text: str | None = None) -> str | None:
    """DCN version announced by amdgpu in the kernel log, e.g. '3.2.1'.

    The last announcement wins. Returns None if there is none.
    """
    if log_text is None:
        log_text = _read_kernel_log()

    matches = _DCN_VERSION_RE.findall(log_text)
    if not matches:
        return None

    return matches[-1]
