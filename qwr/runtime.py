"""Fixed host paths and helpers for constructing QEMU command arguments."""

from __future__ import annotations

QEMU_IMG = 'qemu-img'
QEMU_SYSTEM = 'qemu-system-x86_64'

DISK_FORMAT = 'qcow2'
NETDEV_ID = 'net0'
NIC_MODEL = 'e1000'
GUEST_SSH_PORT = 22

# OVMF builds with secure boot enabled and Microsoft keys enrolled.
SECURE_BOOT_CODE = '/usr/share/OVMF/OVMF_CODE_4M.secboot.fd'
SECURE_BOOT_VARS = '/usr/share/OVMF/OVMF_VARS_4M.ms.fd'

# Socket of a swtpm instance started with
# `swtpm socket --tpm2 --ctrl type=unixio,path=...`.
TPM_SOCKET = '/tmp/emulated_tpm/swtpm-sock'
TPM_CHARDEV_ID = 'chrtpm'
TPM_DEVICE_ID = 'tpm0'


def qemu_img_cmd(*args: str) -> list[str]:
    return [QEMU_IMG, *args]


def qemu_system_cmd(*args: str) -> list[str]:
    return [QEMU_SYSTEM, '-enable-kvm', *args]


def pflash_drive(path: str, *, readonly: bool = False) -> list[str]:
    opts = 'if=pflash,format=raw'
    if readonly:
        opts += ',readonly=on'
    return ['-drive', f'{opts},file={path}']
