"""SSH keypair loading and generation.

This module wraps the cryptography library to load an existing PEM
private key or to generate a fresh RSA, ECDSA or Ed25519 keypair.
Public keys are always returned as authorized_keys lines.
"""

import re
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from icecream import ic

from deploy_secret.exceptions import KeyGenerationError, KeyLoadError, UnsupportedAlgorithmError
from deploy_secret.models import ECDSACurve, KeyPair, PrivateKeyAlgorithm

_PEM_BLOCK = re.compile(rb"-----BEGIN ([A-Z0-9 ]+)-----\r?\n.*?-----END \1-----", re.DOTALL)
_OPENSSH_BLOCK_TYPE = b"OPENSSH PRIVATE KEY"

_RSA_PUBLIC_EXPONENT = 65537

_CURVES: dict[ECDSACurve, type[ec.EllipticCurve]] = {
    ECDSACurve.P256: ec.SECP256R1,
    ECDSACurve.P384: ec.SECP384R1,
    ECDSACurve.P521: ec.SECP521R1,
}


def _authorized_key(private_key: PrivateKeyTypes) -> bytes:
    """Marshal the public half of a private key as an authorized_keys line."""
    public = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.OpenSSH,
        format=serialization.PublicFormat.OpenSSH,
    )
    return public + b"\n"


def load_key_pair(path: str) -> KeyPair:
    """Load a keypair from an existing PEM private key file.

    The returned private key is the complete file content, not just the
    decoded PEM block. The public key is derived from the parsed key.

    Args:
        path: Path to the private key file.

    Returns:
        The loaded KeyPair.

    Raises:
        KeyLoadError: If the file cannot be read, contains no PEM block,
            or the block is not an unencrypted private key.

    """
    try:
        data = Path(path).read_bytes()
    except OSError as err:
        raise KeyLoadError(f"failed to open private key file: {err}") from err

    pem_match = _PEM_BLOCK.search(data)
    if pem_match is None:
        raise KeyLoadError("failed to decode PEM block")
    block, block_type = pem_match.group(0), pem_match.group(1)
    ic(block_type)

    try:
        if block_type == _OPENSSH_BLOCK_TYPE:
            private_key = serialization.load_ssh_private_key(block, password=None)
        else:
            private_key = serialization.load_pem_private_key(block, password=None)
        public_key = _authorized_key(private_key)
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        raise KeyLoadError(f"failed to parse private key '{path}': {err}") from err

    return KeyPair(public_key=public_key, private_key=data)


def generate_rsa_key_pair(bits: int) -> KeyPair:
    """Generate an RSA keypair with a PKCS#1 PEM private key.

    Args:
        bits: The RSA modulus size.

    Returns:
        The generated KeyPair.

    """
    private_key = rsa.generate_private_key(public_exponent=_RSA_PUBLIC_EXPONENT, key_size=bits)
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return KeyPair(public_key=_authorized_key(private_key), private_key=pem)


def generate_ecdsa_key_pair(curve: ECDSACurve | str) -> KeyPair:
    """Generate an ECDSA keypair with a SEC1 PEM private key.

    Args:
        curve: Name of the curve (p256, p384 or p521).

    Returns:
        The generated KeyPair.

    Raises:
        ValueError: If the curve name is unknown.

    """
    private_key = ec.generate_private_key(_CURVES[ECDSACurve(curve)]())
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return KeyPair(public_key=_authorized_key(private_key), private_key=pem)


def generate_ed25519_key_pair() -> KeyPair:
    """Generate an Ed25519 keypair with an OpenSSH PEM private key."""
    private_key = Ed25519PrivateKey.generate()
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.OpenSSH,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return KeyPair(public_key=_authorized_key(private_key), private_key=pem)


def generate_key_pair(
    algorithm: PrivateKeyAlgorithm | str,
    *,
    rsa_key_bits: int,
    ecdsa_curve: ECDSACurve | str,
) -> KeyPair:
    """Generate a new keypair for the given algorithm.

    Args:
        algorithm: One of rsa, ecdsa or ed25519.
        rsa_key_bits: Bit size used when algorithm is rsa.
        ecdsa_curve: Curve name used when algorithm is ecdsa.

    Returns:
        The generated KeyPair.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not supported.
        KeyGenerationError: If the crypto backend rejects the parameters.

    """
    try:
        match algorithm:
            case PrivateKeyAlgorithm.RSA:
                ic(rsa_key_bits)
                return generate_rsa_key_pair(rsa_key_bits)
            case PrivateKeyAlgorithm.ECDSA:
                ic(ecdsa_curve)
                return generate_ecdsa_key_pair(ecdsa_curve)
            case PrivateKeyAlgorithm.ED25519:
                return generate_ed25519_key_pair()
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        raise KeyGenerationError(f"key pair generation failed, error: {err}") from err

    raise UnsupportedAlgorithmError(f"unsupported public key algorithm: {algorithm}")
