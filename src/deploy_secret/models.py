"""Data models for deploy-secret.

This module provides the input options, the keypair type and the
constants shared by the generator and the command line interface.
"""

from dataclasses import dataclass
from enum import Enum

# Secret data keys read by the Git source controller
USERNAME_SECRET_KEY = "username"
PASSWORD_SECRET_KEY = "password"
CA_FILE_SECRET_KEY = "caFile"
PRIVATE_KEY_SECRET_KEY = "identity"
PUBLIC_KEY_SECRET_KEY = "identity.pub"
KNOWN_HOSTS_SECRET_KEY = "known_hosts"

DEFAULT_NAME = "flux-system"
DEFAULT_NAMESPACE = "flux-system"
DEFAULT_MANIFEST_FILE = "secret.yaml"
DEFAULT_RSA_KEY_BITS = 2048


class PrivateKeyAlgorithm(str, Enum):
    """Supported SSH private key algorithms.

    Inherits from str so plain strings coming from the command line
    compare equal to the members.
    """

    RSA = "rsa"
    ECDSA = "ecdsa"
    ED25519 = "ed25519"


class ECDSACurve(str, Enum):
    """Named curves accepted for ECDSA key generation."""

    P256 = "p256"
    P384 = "p384"
    P521 = "p521"


DEFAULT_PRIVATE_KEY_ALGORITHM = PrivateKeyAlgorithm.RSA
DEFAULT_ECDSA_CURVE = ECDSACurve.P384


class CredentialMode(str, Enum):
    """Which credential branch a single generation run takes."""

    PASSWORD = "password"
    LOADED_KEY = "loaded-key"
    GENERATED_KEY = "generated-key"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class KeyPair:
    """An SSH keypair.

    Attributes:
        public_key: The public key as an authorized_keys line.
        private_key: The PEM encoded private key.

    """

    public_key: bytes
    private_key: bytes


@dataclass(frozen=True, slots=True)
class Options:
    """Parameters for generating a Git authentication secret.

    Empty strings mean "not set". The credential fields are evaluated
    in priority order: username/password, private key file, key algorithm.

    Attributes:
        name: Name of the secret.
        namespace: Namespace of the secret.
        target_path: Root directory of the manifest path.
        manifest_file: File name of the manifest.
        username: Basic auth username.
        password: Basic auth password.
        private_key_path: Path to an existing PEM private key.
        private_key_algorithm: Algorithm used to generate a new key.
        rsa_key_bits: Bit size for generated RSA keys.
        ecdsa_curve: Curve name for generated ECDSA keys.
        ca_file_path: Path to a CA certificate for TLS verification.
        ssh_hostname: Git host to scan for its SSH host key.

    """

    name: str = DEFAULT_NAME
    namespace: str = DEFAULT_NAMESPACE
    target_path: str = ""
    manifest_file: str = DEFAULT_MANIFEST_FILE
    username: str = ""
    password: str = ""
    private_key_path: str = ""
    private_key_algorithm: PrivateKeyAlgorithm | str = ""
    rsa_key_bits: int = DEFAULT_RSA_KEY_BITS
    ecdsa_curve: ECDSACurve | str = DEFAULT_ECDSA_CURVE
    ca_file_path: str = ""
    ssh_hostname: str = ""

    @property
    def credential_mode(self) -> CredentialMode:
        """Return the credential branch these options select."""
        if self.username or self.password:
            return CredentialMode.PASSWORD
        if self.private_key_path:
            return CredentialMode.LOADED_KEY
        if self.private_key_algorithm:
            return CredentialMode.GENERATED_KEY
        return CredentialMode.NONE


def make_default_options() -> Options:
    """Return options with the default algorithm preselected."""
    return Options(private_key_algorithm=DEFAULT_PRIVATE_KEY_ALGORITHM)
