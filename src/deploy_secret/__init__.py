"""deploy-secret: Git credentials Secret generator for GitOps controllers.

This package generates a Kubernetes Secret manifest holding the Git
authentication material a source controller needs: an SSH keypair with
the server's known_hosts entry, basic auth credentials, or a CA file.

Example usage:
    from deploy_secret import Options, PrivateKeyAlgorithm, generate

    options = Options(
        target_path="clusters/prod",
        private_key_algorithm=PrivateKeyAlgorithm.ED25519,
        ssh_hostname="github.com",
    )
    manifest = generate(options)
    manifest.write_file()
"""

__version__ = "0.1.0"

from icecream import ic

# Debug tracing stays off for library use; the CLI turns it on with --debug
ic.disable()

from deploy_secret.exceptions import (
    CAFileError,
    DeploySecretError,
    HostKeyScanError,
    KeyGenerationError,
    KeyLoadError,
    ManifestSerializationError,
    ManifestWriteError,
    UnsupportedAlgorithmError,
)
from deploy_secret.generator import generate
from deploy_secret.manifest import Manifest
from deploy_secret.models import ECDSACurve, KeyPair, Options, PrivateKeyAlgorithm, make_default_options

__all__ = [
    # Version
    "__version__",
    # Generator
    "generate",
    # Models
    "Manifest",
    "Options",
    "KeyPair",
    "PrivateKeyAlgorithm",
    "ECDSACurve",
    "make_default_options",
    # Exceptions
    "DeploySecretError",
    "KeyLoadError",
    "CAFileError",
    "UnsupportedAlgorithmError",
    "KeyGenerationError",
    "HostKeyScanError",
    "ManifestSerializationError",
    "ManifestWriteError",
]
