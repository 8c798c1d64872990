"""Custom exceptions for deploy-secret.

This module defines the exception hierarchy used throughout the application
to provide meaningful error messages and proper error handling.
"""


class DeploySecretError(Exception):
    """Base exception for all deploy-secret errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all deploy-secret errors with a single
    except clause if desired.
    """

    pass


class KeyLoadError(DeploySecretError):
    """Raised when an existing private key cannot be loaded.

    This can occur when:
    - The key file does not exist or is unreadable
    - The file does not contain a PEM block
    - The PEM payload is not a supported, unencrypted private key
    """

    pass


class CAFileError(DeploySecretError):
    """Raised when the CA certificate file cannot be read."""

    pass


class UnsupportedAlgorithmError(DeploySecretError):
    """Raised when the requested key algorithm is not supported.

    deploy-secret supports rsa, ecdsa and ed25519 keys.
    """

    pass


class KeyGenerationError(DeploySecretError):
    """Raised when generating a new keypair fails.

    This typically means:
    - The RSA bit size was rejected by the crypto backend
    - The ECDSA curve name is unknown
    """

    pass


class HostKeyScanError(DeploySecretError):
    """Raised when the SSH host key of the Git server cannot be retrieved.

    This can occur when:
    - The host is unreachable or the scan times out
    - ssh-keyscan is not installed
    - The server did not return any host key
    """

    pass


class ManifestSerializationError(DeploySecretError):
    """Raised when the secret cannot be serialized to YAML."""

    pass


class ManifestWriteError(DeploySecretError):
    """Raised when the manifest cannot be written to disk."""

    pass
