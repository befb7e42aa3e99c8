"""Advisory host resource checks for the requested VM sizes.

Values are opaque strings; anything that is not a plain integer is skipped
rather than rejected.
"""

from __future__ import annotations

import os
from pathlib import Path

from .config import LAUNCH_MODES, MODE_CREATE_DRIVE, MODE_INSTALL, LaunchConfig


def _as_int(value: str | None) -> int | None:
    # int() accepts exactly the characters isdecimal() accepts.
    if value is None or not value.strip().isdecimal():
        return None
    return int(value)


def host_mem_total_mb() -> int | None:
    try:
        text = Path('/proc/meminfo').read_text(encoding='utf-8', errors='ignore')
    except Exception:
        return None
    for line in text.splitlines():
        if line.startswith('MemTotal:'):
            parts = line.split()
            if len(parts) >= 2 and parts[1].isdigit():
                return int(parts[1]) // 1024
    return None


def host_cpu_count() -> int | None:
    try:
        count = os.cpu_count()
    except Exception:
        return None
    return int(count) if count else None


def host_free_disk_gb(path: Path) -> float | None:
    try:
        stat = os.statvfs(str(path))
    except Exception:
        return None
    free_bytes = int(stat.f_bavail) * int(stat.f_frsize)
    return free_bytes / (1024**3)


def resource_warning_lines(cfg: LaunchConfig) -> list[str]:
    warnings: list[str] = []
    if cfg.mode in LAUNCH_MODES:
        mem_gb = _as_int(cfg.memory)
        mem_total_mb = host_mem_total_mb()
        if (
            mem_gb is not None
            and mem_total_mb is not None
            and mem_gb * 1024 > int(mem_total_mb * 0.8)
        ):
            warnings.append(
                'Requested VM memory is large relative to host total memory: '
                f'requested={mem_gb} GiB, MemTotal={mem_total_mb} MiB. '
                'If QEMU fails to start, lower --mem.'
            )
        cores = _as_int(cfg.cores)
        cpu_count = host_cpu_count()
        if cores is not None and cpu_count is not None and cores > cpu_count:
            warnings.append(
                'Requested VM cores exceed host CPU count: '
                f'requested={cores}, host_cpus={cpu_count}. '
                'If QEMU fails to start, lower --cores.'
            )

    if cfg.mode in (MODE_CREATE_DRIVE, MODE_INSTALL) and cfg.image:
        size_gb = _as_int(cfg.size)
        parent = Path(cfg.image).expanduser().resolve().parent
        free_gb = host_free_disk_gb(parent)
        if size_gb is not None and free_gb is not None and size_gb > free_gb:
            # qcow2 grows on demand, so this only matters once the guest fills it.
            warnings.append(
                'Requested disk size exceeds free space: '
                f'requested={size_gb} GiB, free≈{free_gb:.1f} GiB '
                f'(dir={parent}).'
            )
    return warnings
