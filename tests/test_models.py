"""Tests for models.py module."""

import dataclasses

import pytest

from deploy_secret.models import CredentialMode, ECDSACurve, Options, PrivateKeyAlgorithm, make_default_options


class TestCredentialMode:
    """Tests for credential branch selection."""

    @pytest.mark.parametrize(
        ("options", "expected"),
        [
            (Options(username="git"), CredentialMode.PASSWORD),
            (Options(password="token", private_key_path="id_rsa"), CredentialMode.PASSWORD),
            (Options(private_key_path="id_rsa", private_key_algorithm="rsa"), CredentialMode.LOADED_KEY),
            (Options(private_key_algorithm=PrivateKeyAlgorithm.ECDSA), CredentialMode.GENERATED_KEY),
            (Options(private_key_algorithm="unknown"), CredentialMode.GENERATED_KEY),
            (Options(ca_file_path="ca.crt"), CredentialMode.NONE),
        ],
    )
    def test_priority_order(self, options, expected):
        """Test the first matching branch wins."""
        assert options.credential_mode == expected


class TestOptions:
    """Tests for option defaults."""

    def test_defaults(self):
        """Test the default options target flux-system with an RSA key."""
        options = make_default_options()

        assert options.name == "flux-system"
        assert options.namespace == "flux-system"
        assert options.manifest_file == "secret.yaml"
        assert options.private_key_algorithm == PrivateKeyAlgorithm.RSA
        assert options.rsa_key_bits == 2048
        assert options.ecdsa_curve == ECDSACurve.P384

    def test_frozen(self):
        """Test options cannot be mutated."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            Options().name = "other"

    def test_enum_members_compare_to_strings(self):
        """Test enum values can be used where plain strings arrive."""
        assert PrivateKeyAlgorithm.ED25519 == "ed25519"
        assert ECDSACurve("p521") is ECDSACurve.P521
