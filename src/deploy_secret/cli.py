#!/usr/bin/env python
"""Command-line interface for deploy-secret.

This module provides the main CLI entry point, turning a Git URL and
credential flags into generation options and printing or writing the
resulting Secret manifest.
"""

import sys
from urllib.parse import urlparse

import click
import yaml
from icecream import ic
from rich.markup import escape

from deploy_secret import __version__, console
from deploy_secret.exceptions import DeploySecretError
from deploy_secret.generator import generate
from deploy_secret.manifest import Manifest
from deploy_secret.models import (
    DEFAULT_ECDSA_CURVE,
    DEFAULT_MANIFEST_FILE,
    DEFAULT_NAME,
    DEFAULT_NAMESPACE,
    DEFAULT_PRIVATE_KEY_ALGORITHM,
    DEFAULT_RSA_KEY_BITS,
    PUBLIC_KEY_SECRET_KEY,
    ECDSACurve,
    Options,
    PrivateKeyAlgorithm,
)

_MIN_RSA_KEY_BITS = 1024


def _validate_rsa_bits(ctx: click.Context, param: click.Parameter, value: int) -> int:
    """Reject RSA key sizes the crypto backend would refuse."""
    if value % 8 != 0:
        raise click.BadParameter("RSA key bit size must be a multiple of 8")
    if value < _MIN_RSA_KEY_BITS:
        raise click.BadParameter(f"RSA key bit size must be at least {_MIN_RSA_KEY_BITS}")
    return value


def build_options(
    *,
    url: str,
    name: str,
    namespace: str,
    target_path: str,
    manifest_file: str,
    username: str,
    password: str,
    private_key_file: str,
    ssh_key_algorithm: str,
    ssh_rsa_bits: int,
    ssh_ecdsa_curve: str,
    ca_file: str,
) -> Options:
    """Translate CLI arguments into generation options based on the URL scheme.

    Raises:
        click.BadParameter: If the URL scheme is unsupported or HTTP/S
            credentials are missing.

    """
    parsed = urlparse(url)
    ic(parsed.scheme, parsed.netloc)

    match parsed.scheme:
        case "ssh":
            host = parsed.netloc.rpartition("@")[2]
            if not host:
                raise click.BadParameter(f"Git URL '{url}' has no host", param_hint="'--url'")
            if username or password:
                console.warning("Username and password are ignored for Git over SSH")
            return Options(
                name=name,
                namespace=namespace,
                target_path=target_path,
                manifest_file=manifest_file,
                private_key_path=private_key_file,
                private_key_algorithm=ssh_key_algorithm,
                rsa_key_bits=ssh_rsa_bits,
                ecdsa_curve=ssh_ecdsa_curve,
                ca_file_path=ca_file,
                ssh_hostname=host,
            )
        case "http" | "https":
            if not username or not password:
                raise click.BadParameter(
                    "for Git over HTTP/S the username and password are required",
                    param_hint="'--username' / '--password'",
                )
            return Options(
                name=name,
                namespace=namespace,
                target_path=target_path,
                manifest_file=manifest_file,
                username=username,
                password=password,
                ca_file_path=ca_file,
            )
        case _:
            raise click.BadParameter(
                f"Git URL scheme '{parsed.scheme}' not supported, can be: ssh, http and https",
                param_hint="'--url'",
            )


def show_deploy_key(manifest: Manifest) -> None:
    """Print the public key stored in the manifest, if any."""
    document = yaml.safe_load(manifest.content) or {}
    public_key = document.get("stringData", {}).get(PUBLIC_KEY_SECRET_KEY)
    if public_key:
        console.info(f"Deploy key: {escape(public_key.strip())}")
        console.step("Add this key with read access to your Git repository")


@click.command(help="Generate a Kubernetes Secret with Git credentials for a GitOps source controller")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--url", required=False, help="Git repository URL (ssh://, http:// or https://)")
@click.option("--name", default=DEFAULT_NAME, show_default=True, help="secret name")
@click.option("--namespace", default=DEFAULT_NAMESPACE, show_default=True, help="secret namespace")
@click.option("--target-path", default="", help="root directory of the manifest path")
@click.option("--manifest-file", default=DEFAULT_MANIFEST_FILE, show_default=True, help="manifest file name")
@click.option("--username", "-u", default="", help="basic authentication username")
@click.option("--password", "-p", default="", help="basic authentication password")
@click.option("--private-key-file", default="", help="path to an existing SSH private key")
@click.option(
    "--ssh-key-algorithm",
    type=click.Choice([algorithm.value for algorithm in PrivateKeyAlgorithm]),
    default=DEFAULT_PRIVATE_KEY_ALGORITHM.value,
    show_default=True,
    help="SSH public key algorithm",
)
@click.option(
    "--ssh-rsa-bits",
    type=int,
    default=DEFAULT_RSA_KEY_BITS,
    show_default=True,
    callback=_validate_rsa_bits,
    help="SSH RSA public key bit size",
)
@click.option(
    "--ssh-ecdsa-curve",
    type=click.Choice([curve.value for curve in ECDSACurve]),
    default=DEFAULT_ECDSA_CURVE.value,
    show_default=True,
    help="SSH ECDSA public key curve",
)
@click.option("--ca-file", default="", help="path to TLS CA file used for validating self-signed certificates")
@click.option("--export", required=False, is_flag=True, help="print the manifest to stdout instead of writing it")
def cli(
    version: bool,
    debug: bool,
    url: str | None,
    name: str,
    namespace: str,
    target_path: str,
    manifest_file: str,
    username: str,
    password: str,
    private_key_file: str,
    ssh_key_algorithm: str,
    ssh_rsa_bits: int,
    ssh_ecdsa_curve: str,
    ca_file: str,
    export: bool,
) -> None:
    """Process CLI arguments and generate the secret manifest."""
    if debug:
        ic.enable()
    else:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    if not url:
        raise click.UsageError("Missing option '--url'")

    options = build_options(
        url=url,
        name=name,
        namespace=namespace,
        target_path=target_path,
        manifest_file=manifest_file,
        username=username,
        password=password,
        private_key_file=private_key_file,
        ssh_key_algorithm=ssh_key_algorithm,
        ssh_rsa_bits=ssh_rsa_bits,
        ssh_ecdsa_curve=ssh_ecdsa_curve,
        ca_file=ca_file,
    )

    try:
        manifest = generate(options)

        if export:
            click.echo(manifest.content, nl=False)
            return

        output_path = manifest.write_file()
    except DeploySecretError as e:
        console.error(f"Secret generation failed: {escape(str(e))}")
        sys.exit(1)

    console.newline()
    console.summary_panel(
        "Git Secret Created",
        {
            "Name": options.name,
            "Namespace": options.namespace,
            "Mode": options.credential_mode.value,
            "Output": str(output_path),
        },
    )
    show_deploy_key(manifest)


if __name__ == "__main__":
    cli()
