"""Tests for the SettingsBackend interface defaults and InMemoryBackend."""

import pytest

from versioned_settings.backends import InMemoryBackend, SettingsBackend
from versioned_settings.version import Version

V1 = Version(1)


class _MinimalBackend(SettingsBackend):
    """Backend implementing only the required operations."""

    def __init__(self):
        self.closed = []

    def open(self):
        return "handle"

    def close(self, handle):
        self.closed.append(handle)

    def get_value(self, handle, name, version):
        return None

    def set_value(self, handle, name, version, value):
        pass


class TestSettingsBackendDefaults:
    """Test optional operations of the backend interface."""

    def test_abstract_methods_required(self):
        """Should not be instantiable without the required operations."""
        with pytest.raises(TypeError):
            SettingsBackend()  # type: ignore[abstract]

    def test_capabilities_default_off(self):
        """Should advertise no optional capabilities by default."""
        backend = _MinimalBackend()
        assert backend.supports_version_listing is False
        assert backend.supports_version_deletion is False

    def test_optional_operations_raise(self):
        """Should raise NotImplementedError for unsupported operations."""
        backend = _MinimalBackend()

        with pytest.raises(NotImplementedError, match="listing versions"):
            backend.list_versions("handle")
        with pytest.raises(NotImplementedError, match="deleting versions"):
            backend.delete_for_version("handle", V1)

    def test_abort_defaults_to_close(self):
        """Should release the handle through close when aborting."""
        backend = _MinimalBackend()
        backend.abort("handle")
        assert backend.closed == ["handle"]


class TestInMemoryBackend:
    """Test the in-memory backend."""

    def test_initial_data_coerced(self):
        """Should accept version strings in the initial data."""
        backend = InMemoryBackend({"1.0": {"Theme": "dark"}})  # type: ignore[dict-item]
        assert backend.get_value(backend.open(), "Theme", V1) == "dark"

    def test_handles_share_storage(self):
        """Should see writes from one handle in another."""
        backend = InMemoryBackend()
        backend.set_value(backend.open(), "Theme", V1, "dark")

        assert backend.get_value(backend.open(), "Theme", V1) == "dark"
        assert backend.open_count == 2

    def test_list_and_delete(self):
        """Should list distinct versions and delete one in bulk."""
        backend = InMemoryBackend({V1: {"A": "1", "B": "2"}, Version(2): {"A": "3"}})
        handle = backend.open()

        backend.delete_for_version(handle, V1)

        assert backend.list_versions(handle) == {Version(2)}
        assert backend.get_value(handle, "B", V1) is None

    def test_delete_missing_version(self):
        """Should ignore deletes for versions that were never written."""
        backend = InMemoryBackend()
        backend.delete_for_version(backend.open(), V1)
        assert backend.snapshot() == {}

    def test_snapshot_is_a_copy(self):
        """Should not expose the live storage."""
        backend = InMemoryBackend({V1: {"A": "1"}})
        snapshot = backend.snapshot()
        snapshot[V1]["A"] = "changed"

        assert backend.get_value(backend.open(), "A", V1) == "1"
