"""Usage text for the qwr command line."""

from __future__ import annotations

import textwrap

PROG = 'qwr'


def render_help(prog: str = PROG) -> str:
    return textwrap.dedent(f"""
    Usage: {prog} [options] <mode>

    A utility for managing QEMU virtual machines.

    Modes:
      install         Install an OS from an ISO to a disk image
      run             Run a VM with a GUI from a disk image
      ssh             Run a VM in headless mode with SSH access
      create-drive    Create a new disk image

    Options:
      --iso=<file.iso>           * ISO file for installation (required for install)
      --sz=<size>                * Disk size in GB (required for install, create-drive)
      --img=<file.qcow2>         * Disk image file (required for install, run, ssh, create-drive)
      --cores=<number>           * Number of CPU cores (default: 1)
      --mem=<size>               * Memory size in GB (default: 1)
      --extra-disk=<file.qcow2>  * Attach an additional disk image (optional for run, ssh)
      --ssh-port=<port>          * SSH port for host (default: 2222, optional for ssh)
      --tpm                      * Attach an emulated TPM (needs a running swtpm)
      --secure                   * Boot with UEFI secure boot firmware
      --dry-run                  * Print the commands instead of running them
      --verbose                  * Increase log verbosity (repeat for debug)
      -h, --help                 * Display this help message

    Examples:
      Create a 20GB disk image:
        {prog} --img=disk.qcow2 --sz=20 create-drive

      Install from an ISO:
        {prog} --iso=ubuntu.iso --img=disk.qcow2 --sz=20 --cores=2 --mem=4 install

      Run a VM with GUI:
        {prog} --img=disk.qcow2 --cores=2 --mem=4 run

      Run a VM with SSH access:
        {prog} --img=disk.qcow2 --ssh-port=2222 ssh
    """).strip()
