"""
Tests for the YAML credential store.
"""

import os
import stat

import pytest
import yaml

from ghrepo.domain import Credential
from ghrepo.infra.credential_store import CredentialStore, CredentialStoreError


class TestCredentialStore:

    def test_save_then_load(self, tmp_path):
        store = CredentialStore(tmp_path / ".ghreporc.yml")
        credential = Credential(username="alice", token="gho_abc")

        store.save(credential)

        assert store.load() == credential

    def test_document_layout(self, tmp_path):
        path = tmp_path / ".ghreporc.yml"
        CredentialStore(path).save(Credential(organization="acme", token="gho_abc"))

        document = yaml.safe_load(path.read_text())
        assert document == {"data": {"organization": "acme", "token": "gho_abc"}}

    def test_file_is_private(self, tmp_path):
        path = tmp_path / ".ghreporc.yml"
        CredentialStore(path).save(Credential(username="alice", token="gho_abc"))

        mode = stat.S_IMODE(os.stat(path).st_mode)
        assert mode == 0o600

    def test_save_replaces_whole_record(self, tmp_path):
        store = CredentialStore(tmp_path / ".ghreporc.yml")
        store.save(Credential(username="alice", token="one"))
        store.save(Credential(organization="acme", token="two"))

        assert store.load() == Credential(organization="acme", token="two")

    def test_no_temp_files_left_behind(self, tmp_path):
        store = CredentialStore(tmp_path / ".ghreporc.yml")
        store.save(Credential(username="alice", token="gho_abc"))

        assert [p.name for p in tmp_path.iterdir()] == [".ghreporc.yml"]

    def test_creates_parent_directory(self, tmp_path):
        store = CredentialStore(tmp_path / "nested" / "creds.yml")
        store.save(Credential(username="alice", token="t"))
        assert store.load().token == "t"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CredentialStoreError, match="No stored credential"):
            CredentialStore(tmp_path / "missing.yml").load()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / ".ghreporc.yml"
        path.write_text("data: {username: [unclosed\n")
        with pytest.raises(CredentialStoreError):
            CredentialStore(path).load()

    def test_missing_root_key(self, tmp_path):
        path = tmp_path / ".ghreporc.yml"
        path.write_text("username: alice\ntoken: abc\n")
        with pytest.raises(CredentialStoreError, match="Malformed"):
            CredentialStore(path).load()

    def test_empty_file(self, tmp_path):
        path = tmp_path / ".ghreporc.yml"
        path.write_text("")
        with pytest.raises(CredentialStoreError):
            CredentialStore(path).load()

    def test_record_without_token(self, tmp_path):
        path = tmp_path / ".ghreporc.yml"
        path.write_text("data:\n  username: alice\n")
        credential = CredentialStore(path).load()
        assert credential.username == "alice"
        assert credential.is_anonymous

    def test_clear(self, tmp_path):
        store = CredentialStore(tmp_path / ".ghreporc.yml")
        store.save(Credential(username="alice", token="t"))

        assert store.clear() is True
        assert store.clear() is False
        assert not store.path.exists()

    def test_expands_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        store = CredentialStore("~/.ghreporc.yml")
        assert store.path == tmp_path / ".ghreporc.yml"
