"""
Tests for path helpers used by the scanner and the swap protocol.
"""
import os

from onelink.utils.path_utils import (
    BACKUP_MARKER, backup_path_for, backup_token, directory_of, make_path)


class TestMakePath:

    def test_joins_directory_and_name(self):
        assert make_path("photos", "a.jpg") == os.path.join("photos", "a.jpg")

    def test_current_directory_is_not_prefixed(self):
        assert make_path(".", "a.jpg") == "a.jpg"
        assert make_path("", "a.jpg") == "a.jpg"

    def test_absolute_name_is_kept(self):
        assert make_path("photos", "/tmp/a.jpg") == "/tmp/a.jpg"

    def test_directory_of_bare_name(self):
        assert directory_of("a.jpg") == "."
        assert directory_of("photos/a.jpg") == "photos"


class TestBackupNames:

    def test_backup_stays_in_same_directory(self):
        backup = backup_path_for("/data/dir/file.txt", token="abc")
        assert backup == f"/data/dir/{BACKUP_MARKER}abc"
        assert os.path.dirname(backup) == "/data/dir"

    def test_backup_length_does_not_depend_on_the_name(self):
        short = backup_path_for("/data/a", token="abc")
        long = backup_path_for("/data/" + "a" * 250, token="abc")
        assert short == long

    def test_bare_name_gets_bare_backup(self):
        assert backup_path_for("file.txt", token="abc") == f"{BACKUP_MARKER}abc"

    def test_tokens_differ_between_attempts(self):
        assert backup_token(pid=1, now_ns=5) != backup_token(pid=1, now_ns=5)

    def test_generated_backup_names_are_distinct(self):
        names = {backup_path_for("file") for _ in range(50)}
        assert len(names) == 50
