"""Command-line front end for creating, installing and running QEMU VMs."""

__version__ = '0.1.0'
