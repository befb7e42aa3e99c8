"""Tests for per-mode command construction."""

from __future__ import annotations

import pytest

from qwr import runtime
from qwr.args import tokenize
from qwr.builder import build, launch_segments, require_fields
from qwr.config import LaunchConfig
from qwr.errors import UsageError, ValidationError
from qwr.interpret import interpret
from qwr.util import shell_join


def _build(*argv: str) -> list[list[str]]:
    return build(interpret(tokenize(list(argv))))


def _segment_names(cfg: LaunchConfig) -> list[str]:
    return [name for name, _ in launch_segments(cfg)]


def test_create_drive() -> None:
    cmds = _build('--img=a.qcow2', '--sz=20', 'create-drive')
    assert cmds == [['qemu-img', 'create', '-f', 'qcow2', 'a.qcow2', '20G']]
    assert shell_join(cmds[0]) == 'qemu-img create -f qcow2 a.qcow2 20G'


def test_run_default_command() -> None:
    (cmd,) = _build('--img=a.qcow2', 'run')
    assert cmd == [
        'qemu-system-x86_64', '-enable-kvm',
        '-m', '1G',
        '-smp', '1',
        '-cpu', 'host',
        '-hda', 'a.qcow2',
        '-netdev', 'user,id=net0',
        '-device', 'e1000,netdev=net0',
        '-vga', 'virtio', '-display', 'sdl',
    ]


def test_install_produces_disk_then_launch() -> None:
    cmds = _build(
        '--iso=u.iso', '--img=a.qcow2', '--sz=20', '--mem=4', '--cores=2',
        'install',
    )
    assert len(cmds) == 2
    assert cmds[0] == _build('--img=a.qcow2', '--sz=20', 'create-drive')[0]
    launch = shell_join(cmds[1])
    assert '-cdrom u.iso' in launch
    assert '-hda a.qcow2' in launch
    assert '-boot d' in launch
    assert '-m 4G' in launch
    assert '-smp 2' in launch
    assert '-vga virtio -display sdl' in launch
    assert 'hostfwd' not in launch


def test_install_ignores_extra_disk() -> None:
    cmds = _build(
        '--iso=u.iso', '--img=a.qcow2', '--sz=20', '--extra-disk=x.qcow2',
        'install',
    )
    assert all('-hdb' not in cmd for cmd in cmds)


def test_run_extra_disk_is_last() -> None:
    (cmd,) = _build('--img=a.qcow2', '--extra-disk=x.qcow2', 'run')
    assert cmd[-2:] == ['-hdb', 'x.qcow2']
    assert cmd.index('-hdb') > cmd.index('-display')
    (cmd,) = _build('--img=a.qcow2', 'run')
    assert '-hdb' not in shell_join(cmd)


def test_ssh_defaults() -> None:
    (cmd,) = _build('--img=a.qcow2', 'ssh')
    text = shell_join(cmd)
    assert 'user,id=net0,hostfwd=tcp::2222-:22' in cmd
    assert '-nographic' in cmd
    assert '-vga' not in text
    assert '-display' not in text
    assert '-cdrom' not in text
    assert '-boot' not in text


def test_ssh_custom_port_and_extra_disk() -> None:
    (cmd,) = _build(
        '--img=a.qcow2', '--ssh-port=2200', '--extra-disk=x.qcow2', 'ssh'
    )
    assert 'user,id=net0,hostfwd=tcp::2200-:22' in cmd
    assert cmd[-3:] == ['-nographic', '-hdb', 'x.qcow2']


def test_ssh_port_ignored_outside_ssh() -> None:
    (cmd,) = _build('--img=a.qcow2', '--ssh-port=2200', 'run')
    assert 'hostfwd' not in shell_join(cmd)


@pytest.mark.parametrize('mode', ['run', 'ssh', 'install'])
def test_firmware_block_order(mode) -> None:
    cfg = interpret(tokenize([
        '--iso=u.iso', '--img=a.qcow2', '--sz=20', '--tpm', '--secure', mode,
    ]))
    names = _segment_names(cfg)
    assert names.index('firmware') < names.index('cpu')
    cmd = build(cfg)[-1]
    cpu_at = cmd.index('-cpu')
    pflash_at = [i for i, a in enumerate(cmd) if 'pflash' in a]
    chardev_at = cmd.index('-chardev')
    assert pflash_at and max(pflash_at) < chardev_at < cpu_at
    assert cmd[cpu_at + 1] == 'host'


@pytest.mark.parametrize('mode', ['run', 'ssh', 'install'])
def test_no_firmware_block_by_default(mode) -> None:
    cmds = _build('--iso=u.iso', '--img=a.qcow2', '--sz=20', mode)
    text = shell_join(cmds[-1])
    assert 'pflash' not in text
    assert 'tpm' not in text


def test_secure_boot_block() -> None:
    (cmd,) = _build('--img=a.qcow2', '--secure', 'run')
    text = shell_join(cmd)
    assert (
        f'-drive if=pflash,format=raw,readonly=on,file={runtime.SECURE_BOOT_CODE}'
        in text
    )
    assert f'-drive if=pflash,format=raw,file={runtime.SECURE_BOOT_VARS}' in text
    assert '-machine q35,smm=on' in text
    assert '-global driver=cfi.pflash01,property=secure,value=on' in text
    assert 'tpm' not in text


def test_tpm_block() -> None:
    (cmd,) = _build('--img=a.qcow2', '--tpm', 'ssh')
    text = shell_join(cmd)
    assert f'-chardev socket,id=chrtpm,path={runtime.TPM_SOCKET}' in text
    assert '-tpmdev emulator,id=tpm0,chardev=chrtpm' in text
    assert '-device tpm-tis,tpmdev=tpm0' in text
    assert 'pflash' not in text


def test_segments_keep_fixed_order() -> None:
    cfg = LaunchConfig(mode='run', image='a.qcow2')
    assert _segment_names(cfg) == [
        'base', 'memory', 'smp', 'firmware', 'cpu',
        'disk', 'network', 'display', 'extra_disk',
    ]


@pytest.mark.parametrize('mode', ['install', 'run', 'ssh', 'create-drive'])
def test_missing_image(mode) -> None:
    argv = ['--iso=u.iso', '--sz=20', mode]
    for _ in range(2):
        with pytest.raises(UsageError, match=f'`{mode}` requires --img'):
            _build(*argv)


def test_required_field_order() -> None:
    with pytest.raises(ValidationError, match='`install` requires --iso'):
        _build('install')
    with pytest.raises(ValidationError, match='`install` requires --sz'):
        _build('--iso=u.iso', '--img=a.qcow2', 'install')
    with pytest.raises(ValidationError, match='`create-drive` requires --sz'):
        _build('--img=a.qcow2', 'create-drive')


def test_require_fields_against_other_modes() -> None:
    cfg = LaunchConfig(mode='run', image='a.qcow2')
    require_fields(cfg)
    require_fields(cfg, 'ssh')
    with pytest.raises(ValidationError, match='requires --sz'):
        require_fields(cfg, 'create-drive')
    with pytest.raises(ValidationError, match='requires --iso'):
        require_fields(cfg, 'install')


def test_unknown_mode_in_config() -> None:
    with pytest.raises(UsageError, match='unknown mode'):
        build(LaunchConfig(mode='boot', image='a.qcow2'))
