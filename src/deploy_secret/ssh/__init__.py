"""SSH subpackage.

This package contains key loading and generation, host key scanning,
and the provider interface the manifest generator depends on.
"""

from deploy_secret.ssh.hostkey import scan_host_key
from deploy_secret.ssh.keys import generate_key_pair, load_key_pair
from deploy_secret.ssh.provider import DefaultSSHProvider, SSHProvider

__all__ = [
    # keys
    "load_key_pair",
    "generate_key_pair",
    # hostkey
    "scan_host_key",
    # provider
    "SSHProvider",
    "DefaultSSHProvider",
]
