"""SSH host key scanning.

This module retrieves the public host key of a Git server in
known_hosts format by running ssh-keyscan against it.
"""

import subprocess

from icecream import ic

from deploy_secret.exceptions import HostKeyScanError

DEFAULT_SSH_PORT = 22
DEFAULT_SCAN_TIMEOUT = 30

_ERR_KEYSCAN_NOT_FOUND = "ssh-keyscan not found; please install OpenSSH and ensure it's on PATH"
_ERR_SCAN_FAILED = "SSH key scan for host {host} failed, error: {reason}"


def _require_port(port: str, host: str) -> str:
    if not port:
        raise ValueError(f"missing port in address {host!r}")
    return port


def split_host_port(host: str) -> tuple[str, str | None]:
    """Split a host string into hostname and optional port.

    Accepts ``host``, ``host:port``, ``[ipv6]:port``, ``[ipv6]`` and
    bare IPv6 addresses.

    Args:
        host: The host string to split.

    Returns:
        A tuple of hostname and port, where port is None if absent.

    Raises:
        ValueError: If a bracketed address is malformed or the port after
            a colon is empty.

    """
    if host.startswith("["):
        end = host.find("]")
        if end == -1:
            raise ValueError(f"missing ']' in address {host!r}")
        hostname, rest = host[1:end], host[end + 1 :]
        if not rest:
            return hostname, None
        if not rest.startswith(":"):
            raise ValueError(f"unexpected characters after ']' in address {host!r}")
        return hostname, _require_port(rest[1:], host)

    if host.count(":") == 1:
        hostname, port = host.split(":")
        return hostname, _require_port(port, host)

    return host, None


def join_host_port(hostname: str, port: str | int) -> str:
    """Join hostname and port, bracketing IPv6 addresses."""
    if ":" in hostname:
        return f"[{hostname}]:{port}"
    return f"{hostname}:{port}"


def scan_host_key(host: str, timeout: int = DEFAULT_SCAN_TIMEOUT) -> bytes:
    """Retrieve the SSH host key of a server in known_hosts format.

    The default SSH port is used when the host string carries none.

    Args:
        host: Hostname, optionally with a port.
        timeout: Seconds to wait for the server before giving up.

    Returns:
        The known_hosts lines returned by the server.

    Raises:
        HostKeyScanError: If the scan fails, times out or returns no key.

    """
    try:
        hostname, port = split_host_port(host)
    except ValueError as err:
        raise HostKeyScanError(_ERR_SCAN_FAILED.format(host=host, reason=err)) from err

    port = port or str(DEFAULT_SSH_PORT)
    address = join_host_port(hostname, port)
    ic(address)

    if not hostname:
        raise HostKeyScanError(_ERR_SCAN_FAILED.format(host=address, reason="hostname is empty"))

    cmd: list[str] = ["ssh-keyscan", "-T", str(timeout), "-p", port, hostname]
    ic(cmd)

    try:
        result = subprocess.run(cmd, capture_output=True, timeout=timeout, check=True)
    except FileNotFoundError as err:
        raise HostKeyScanError(_ERR_SCAN_FAILED.format(host=address, reason=_ERR_KEYSCAN_NOT_FOUND)) from err
    except subprocess.TimeoutExpired as err:
        raise HostKeyScanError(
            _ERR_SCAN_FAILED.format(host=address, reason=f"timed out after {timeout}s")
        ) from err
    except subprocess.CalledProcessError as err:
        stderr_msg = err.stderr.decode().strip() if err.stderr else ""
        reason = f"exit code {err.returncode}" + (f" - {stderr_msg}" if stderr_msg else "")
        raise HostKeyScanError(_ERR_SCAN_FAILED.format(host=address, reason=reason)) from err

    lines = [line.strip() for line in result.stdout.splitlines()]
    keys = [line for line in lines if line and not line.startswith(b"#")]
    if not keys:
        stderr_msg = result.stderr.decode().strip() if result.stderr else ""
        reason = "no host key returned" + (f" - {stderr_msg}" if stderr_msg else "")
        raise HostKeyScanError(_ERR_SCAN_FAILED.format(host=address, reason=reason))

    return b"\n".join(keys) + b"\n"
