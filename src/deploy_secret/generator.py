"""Git authentication secret generator.

This module assembles a Kubernetes Secret holding Git credentials
(basic auth, an SSH keypair with the server's known_hosts entry, and/or
a CA certificate) and renders it as a manifest.
"""

from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from icecream import ic
from kubernetes.client import ApiClient, V1ObjectMeta, V1Secret
from rich.markup import escape

from deploy_secret import console
from deploy_secret.exceptions import CAFileError, ManifestSerializationError
from deploy_secret.manifest import Manifest
from deploy_secret.models import (
    CA_FILE_SECRET_KEY,
    KNOWN_HOSTS_SECRET_KEY,
    PASSWORD_SECRET_KEY,
    PRIVATE_KEY_SECRET_KEY,
    PUBLIC_KEY_SECRET_KEY,
    USERNAME_SECRET_KEY,
    CredentialMode,
    KeyPair,
    Options,
)
from deploy_secret.ssh.hostkey import DEFAULT_SCAN_TIMEOUT
from deploy_secret.ssh.provider import DefaultSSHProvider, SSHProvider

# Lines left behind by serializing an object with empty metadata/status
_CREATION_TIMESTAMP_LINE = "  creationTimestamp: null\n"
_EMPTY_STATUS_LINE = "status: {}\n"


class _LiteralDumper(yaml.SafeDumper):
    """SafeDumper rendering multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LiteralDumper.add_representer(str, _represent_str)


def _to_text(data: bytes) -> str:
    """Decode file content, replacing bytes that are not valid UTF-8."""
    return data.decode("utf-8", errors="replace")


def make_secret(
    key_pair: KeyPair | None,
    host_key: bytes | None,
    ca_file: bytes | None,
    options: Options,
) -> V1Secret:
    """Build the Secret object for the resolved credentials.

    Key material is only included when both the keypair and the host
    key are present.

    Args:
        key_pair: Loaded or generated keypair, if any.
        host_key: known_hosts entry of the Git server, if scanned.
        ca_file: Content of the CA certificate file, if read.
        options: The generation options.

    Returns:
        The populated V1Secret.

    """
    string_data: dict[str, str] = {}

    if options.username or options.password:
        string_data[USERNAME_SECRET_KEY] = options.username
        string_data[PASSWORD_SECRET_KEY] = options.password

    if ca_file is not None:
        string_data[CA_FILE_SECRET_KEY] = _to_text(ca_file)

    if key_pair is not None and host_key is not None:
        string_data[PRIVATE_KEY_SECRET_KEY] = _to_text(key_pair.private_key)
        string_data[PUBLIC_KEY_SECRET_KEY] = _to_text(key_pair.public_key)
        string_data[KNOWN_HOSTS_SECRET_KEY] = _to_text(host_key)

    ic(sorted(string_data))

    return V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=V1ObjectMeta(name=options.name, namespace=options.namespace),
        string_data=string_data or None,
    )


def marshal_secret(secret: V1Secret) -> str:
    """Serialize a Secret to YAML.

    Raises:
        ManifestSerializationError: If the object cannot be serialized.

    """
    with ApiClient() as api_client:
        document: dict[str, Any] = api_client.sanitize_for_serialization(secret)

    try:
        return yaml.dump(document, Dumper=_LiteralDumper, default_flow_style=False, sort_keys=True)
    except yaml.YAMLError as err:
        raise ManifestSerializationError(f"Failed to serialize secret to YAML: {err}") from err


def resource_to_string(data: str) -> str:
    """Remove the empty creationTimestamp and status lines from YAML output."""
    data = data.replace(_CREATION_TIMESTAMP_LINE, "", 1)
    return data.replace(_EMPTY_STATUS_LINE, "", 1)


def _resolve_key_pair(options: Options, provider: SSHProvider) -> KeyPair | None:
    """Load or generate the keypair selected by the options."""
    match options.credential_mode:
        case CredentialMode.PASSWORD | CredentialMode.NONE:
            return None
        case CredentialMode.LOADED_KEY:
            console.step(f"Loading private key from {console.highlight(options.private_key_path)}")
            return provider.load_key_pair(options.private_key_path)
        case CredentialMode.GENERATED_KEY:
            algorithm = getattr(options.private_key_algorithm, "value", options.private_key_algorithm)
            console.step(f"Generating {algorithm} key pair")
            return provider.generate_key_pair(
                options.private_key_algorithm,
                rsa_key_bits=options.rsa_key_bits,
                ecdsa_curve=options.ecdsa_curve,
            )


def _read_ca_file(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as err:
        raise CAFileError(f"failed to read CA file: {err}") from err


def generate(options: Options, provider: SSHProvider | None = None) -> Manifest:
    """Generate the Git authentication secret manifest.

    Exactly one credential branch runs per call, in priority order:
    username/password, private key file, key generation. When a keypair
    results, the SSH host key of ``options.ssh_hostname`` is scanned as
    well; a failing scan aborts the whole generation.

    Args:
        options: The generation options.
        provider: SSH collaborator; defaults to DefaultSSHProvider.

    Returns:
        The Manifest with its path and YAML content.

    Raises:
        DeploySecretError: Any subclass, if a step fails. No partial
            manifest is produced.

    """
    provider = provider or DefaultSSHProvider()
    ic(options.name, options.namespace, options.credential_mode)

    key_pair = _resolve_key_pair(options, provider)

    host_key: bytes | None = None
    if key_pair is not None:
        with console.spinner(f"Scanning SSH host key of {escape(options.ssh_hostname)}..."):
            host_key = provider.scan_host_key(options.ssh_hostname, timeout=DEFAULT_SCAN_TIMEOUT)

    ca_file: bytes | None = None
    if options.ca_file_path:
        ca_file = _read_ca_file(options.ca_file_path)

    secret = make_secret(key_pair, host_key, ca_file, options)
    data = marshal_secret(secret)

    manifest = Manifest(
        path=str(PurePosixPath(options.target_path, options.namespace, options.manifest_file)),
        content=f"---\n{resource_to_string(data)}",
    )
    ic(manifest.path)
    return manifest
