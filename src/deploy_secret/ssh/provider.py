"""SSH collaborator interface used by the manifest generator.

The generator only talks to an SSHProvider, so tests can substitute a
fake that never touches the filesystem or the network.
"""

from typing import Protocol

from deploy_secret.models import ECDSACurve, KeyPair, PrivateKeyAlgorithm
from deploy_secret.ssh import hostkey, keys


class SSHProvider(Protocol):
    """Capabilities the generator needs from an SSH library."""

    def load_key_pair(self, path: str) -> KeyPair: ...

    def generate_key_pair(
        self,
        algorithm: PrivateKeyAlgorithm | str,
        *,
        rsa_key_bits: int,
        ecdsa_curve: ECDSACurve | str,
    ) -> KeyPair: ...

    def scan_host_key(self, host: str, timeout: int) -> bytes: ...


class DefaultSSHProvider:
    """SSHProvider backed by cryptography and ssh-keyscan."""

    def load_key_pair(self, path: str) -> KeyPair:
        return keys.load_key_pair(path)

    def generate_key_pair(
        self,
        algorithm: PrivateKeyAlgorithm | str,
        *,
        rsa_key_bits: int,
        ecdsa_curve: ECDSACurve | str,
    ) -> KeyPair:
        return keys.generate_key_pair(algorithm, rsa_key_bits=rsa_key_bits, ecdsa_curve=ecdsa_curve)

    def scan_host_key(self, host: str, timeout: int) -> bytes:
        return hostkey.scan_host_key(host, timeout=timeout)

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return "DefaultSSHProvider()"
