"""VM launch configuration record and mode names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MODE_INSTALL = 'install'
MODE_RUN = 'run'
MODE_SSH = 'ssh'
MODE_CREATE_DRIVE = 'create-drive'

MODES = (MODE_INSTALL, MODE_RUN, MODE_SSH, MODE_CREATE_DRIVE)

# Modes that boot a guest with qemu-system.
LAUNCH_MODES = (MODE_INSTALL, MODE_RUN, MODE_SSH)

DEFAULT_CORES = '1'
DEFAULT_MEMORY = '1'
DEFAULT_SSH_PORT = '2222'


@dataclass(frozen=True)
class LaunchConfig:
    """
    Everything one qwr invocation needs to build its commands.

    Numeric-looking fields (``size``, ``cores``, ``memory``, ``ssh_port``)
    are kept as the strings the user typed and are forwarded to QEMU
    verbatim. Fields without a default are ``None`` when not given; whether
    they are required depends on the mode and is checked by
    :func:`qwr.builder.build`.
    """

    mode: Optional[str] = None
    iso: Optional[str] = None
    size: Optional[str] = None
    cores: str = DEFAULT_CORES
    memory: str = DEFAULT_MEMORY
    image: Optional[str] = None
    extra_disk: Optional[str] = None
    ssh_port: str = DEFAULT_SSH_PORT
    use_tpm: bool = False
    use_secure_boot: bool = False
    dry_run: bool = False
    verbose: int = 0
