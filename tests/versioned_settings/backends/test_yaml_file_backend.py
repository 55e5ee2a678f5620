"""Tests for YamlFileBackend."""

import pytest
import yaml

from versioned_settings.backends import YamlFileBackend
from versioned_settings.properties import SettingsProperty
from versioned_settings.provider import VersionedSettingsProvider
from versioned_settings.version import Version

V1 = Version(1)
V2 = Version(2)


@pytest.fixture
def store_path(tmp_path):
    """Path of the YAML store inside tmp_path."""
    return tmp_path / "store" / "settings.yaml"


class TestYamlFileBackend:
    """Test the YAML file backend."""

    def test_missing_file_is_empty_store(self, store_path):
        """Should treat a missing file as an empty store."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()

        assert backend.list_versions(handle) == set()
        assert backend.get_value(handle, "Theme", V1) is None

    def test_close_writes_document(self, store_path):
        """Should persist values on close using canonical version keys."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()
        backend.set_value(handle, "Theme", V1, "dark")
        backend.close(handle)

        data = yaml.safe_load(store_path.read_text())
        assert data == {"versions": {"1.0.0.0": {"Theme": "dark"}}}

    def test_values_round_trip_through_file(self, store_path):
        """Should read back values, including strings YAML would otherwise convert."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()
        backend.set_value(handle, "Number", V1, "1.0")
        backend.set_value(handle, "Flag", V1, "yes")
        backend.set_value(handle, "Empty", V1, "")
        backend.close(handle)

        handle = backend.open()
        assert backend.get_value(handle, "Number", V1) == "1.0"
        assert backend.get_value(handle, "Flag", V1) == "yes"
        assert backend.get_value(handle, "Empty", V1) == ""

    def test_unmodified_close_does_not_write(self, store_path):
        """Should not touch the file when nothing changed."""
        backend = YamlFileBackend(store_path)
        backend.close(backend.open())

        assert not store_path.exists()

    def test_abort_discards_changes(self, store_path):
        """Should drop pending changes on abort."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()
        backend.set_value(handle, "Theme", V1, "dark")
        backend.abort(handle)

        assert not store_path.exists()

    def test_backup_created_on_overwrite(self, store_path):
        """Should keep a copy of the previous file."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()
        backend.set_value(handle, "Theme", V1, "dark")
        backend.close(handle)

        handle = backend.open()
        backend.set_value(handle, "Theme", V1, "light")
        backend.close(handle)

        backup = store_path.with_suffix(".yaml.backup")
        assert yaml.safe_load(backup.read_text())["versions"]["1.0.0.0"]["Theme"] == "dark"

    def test_delete_for_version(self, store_path):
        """Should remove every value of one version."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()
        backend.set_value(handle, "Theme", V1, "dark")
        backend.set_value(handle, "Theme", V2, "light")
        backend.delete_for_version(handle, V1)
        backend.close(handle)

        handle = backend.open()
        assert backend.list_versions(handle) == {V2}

    def test_short_version_keys_accepted(self, store_path):
        """Should parse hand-written short version keys."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text('versions:\n  "1.0":\n    Theme: dark\n')
        backend = YamlFileBackend(store_path)

        assert backend.get_value(backend.open(), "Theme", V1) == "dark"

    @pytest.mark.parametrize(
        "content,message",
        [
            ("- just\n- a list\n", "root is not a mapping"),
            ("versions: [1, 2]\n", "invalid 'versions' section"),
            ('versions:\n  "1.0": [dark]\n', "invalid entry for version 1.0"),
            ('versions:\n  "1.0": dark\n', "invalid entry for version 1.0"),
        ],
    )
    def test_invalid_document(self, store_path, content, message):
        """Should reject documents with the wrong shape."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text(content)

        with pytest.raises(ValueError, match=message):
            YamlFileBackend(store_path).open()

    def test_upgrade_through_provider(self, store_path):
        """Should support a full migration and purge."""
        backend = YamlFileBackend(store_path)
        handle = backend.open()
        backend.set_value(handle, "Theme", V1, "dark")
        backend.close(handle)

        provider = VersionedSettingsProvider(backend, "2.0", delete_old_versions_on_upgrade=True)
        provider.upgrade([SettingsProperty(name="Theme")])

        data = yaml.safe_load(store_path.read_text())
        assert data == {"versions": {"2.0.0.0": {"Theme": "dark"}}}
