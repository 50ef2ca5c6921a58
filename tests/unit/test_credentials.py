"""Unit tests for the credential store."""

import pytest

from packages.core.src.errors import PreconditionError
from packages.integrations.harmonic.src.credentials import Credential, CredentialStore


class TestCredentialStore:
    """Tests for CredentialStore."""

    def test_starts_unset(self):
        """A new store holds no credential."""
        store = CredentialStore()
        assert store.is_set() is False

    def test_current_before_set(self):
        """Reading before set raises PreconditionError."""
        store = CredentialStore()
        with pytest.raises(PreconditionError):
            store.current()

    def test_set_and_read(self):
        """The stored key is returned unchanged."""
        store = CredentialStore()
        store.set("abc-123")

        assert store.is_set() is True
        assert store.current().value == "abc-123"

    def test_last_write_wins(self):
        """A second set replaces the first key."""
        store = CredentialStore()
        store.set("first")
        store.set("second")

        assert store.current().value == "second"

    def test_no_format_validation(self):
        """Any string is accepted as a key."""
        store = CredentialStore()
        store.set("  not really a key  ")
        assert store.current().value == "  not really a key  "


class TestCredential:
    """Tests for Credential masking."""

    def test_repr_hides_value(self):
        """The raw key never appears in repr()."""
        credential = Credential("supersecretkey")
        assert "supersecretkey" not in repr(credential)

    def test_preview_is_short_prefix(self):
        """Preview exposes only the first four characters."""
        credential = Credential("supersecretkey")
        assert credential.preview == "supe..."

    @pytest.mark.parametrize("key", ["k1", "abcd", "abcdefgh"])
    def test_short_key_fully_masked(self, key):
        """Keys of eight characters or fewer show no prefix at all."""
        credential = Credential(key)

        assert credential.preview == "****"
        assert key not in credential.preview
