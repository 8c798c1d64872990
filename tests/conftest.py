"""Shared test fixtures for deploy-secret tests."""

from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from deploy_secret.ssh import keys

GITHUB_HOST_KEY = b"github.com ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIOMqqnkVzrm0SdG6UOoqKLsabgH5C9okWi0dh2l9GKJl\n"


class FakeSSHProvider:
    """SSHProvider that uses real key handling but never touches the network."""

    def __init__(self, host_key: bytes = GITHUB_HOST_KEY) -> None:
        self.host_key = host_key
        self.scan_error: Exception | None = None
        self.loaded: list[str] = []
        self.generated: list[str] = []
        self.scanned: list[tuple[str, int]] = []

    def load_key_pair(self, path):
        self.loaded.append(path)
        return keys.load_key_pair(path)

    def generate_key_pair(self, algorithm, *, rsa_key_bits, ecdsa_curve):
        self.generated.append(algorithm)
        return keys.generate_key_pair(algorithm, rsa_key_bits=rsa_key_bits, ecdsa_curve=ecdsa_curve)

    def scan_host_key(self, host, timeout):
        self.scanned.append((host, timeout))
        if self.scan_error is not None:
            raise self.scan_error
        return self.host_key


@pytest.fixture
def fake_provider():
    """Fake SSH collaborator returning a fixed GitHub host key."""
    return FakeSSHProvider()


@pytest.fixture
def ed25519_key_file(tmp_path):
    """An unencrypted Ed25519 private key in OpenSSH format."""
    key = Ed25519PrivateKey.generate()
    path = tmp_path / "id_ed25519"
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def rsa_key_file(tmp_path):
    """An unencrypted RSA private key in PKCS#1 PEM format."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
    path = tmp_path / "id_rsa"
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def ecdsa_pkcs8_key_file(tmp_path):
    """An unencrypted P-256 private key in PKCS#8 PEM format."""
    key = ec.generate_private_key(ec.SECP256R1())
    path = tmp_path / "id_ecdsa"
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def encrypted_key_file(tmp_path):
    """A passphrase protected private key in PKCS#8 PEM format."""
    key = ec.generate_private_key(ec.SECP256R1())
    path = tmp_path / "id_encrypted"
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.BestAvailableEncryption(b"secret"),
        )
    )
    return path


@pytest.fixture
def ca_file(tmp_path):
    """A CA certificate file (content is opaque to the generator)."""
    path = tmp_path / "ca.crt"
    path.write_text("-----BEGIN CERTIFICATE-----\nMIIBfake\n-----END CERTIFICATE-----\n")
    return path


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run used by the host key scan."""
    with patch("deploy_secret.ssh.hostkey.subprocess.run") as mock:
        yield mock
