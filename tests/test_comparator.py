"""
Unit tests for ContentComparatorImpl.
Verifies exact byte comparison, chunk boundaries and unreadable files.
"""
import pytest
from unittest import mock
from onelink.core.comparator import ContentComparatorImpl
from onelink.core.models import CompareResult
from onelink.services.file_service import FileService


class TestContentComparatorImpl:
    """Test byte-for-byte comparison."""

    def test_identical_files_are_equal(self, test_files):
        comparator = ContentComparatorImpl()
        result = comparator.compare(str(test_files["dup1_a"]), str(test_files["dup1_b"]))
        assert result is CompareResult.EQUAL

    def test_same_size_different_content(self, test_files):
        """A single differing byte at the very end must be detected."""
        comparator = ContentComparatorImpl()
        result = comparator.compare(str(test_files["dup1_a"]), str(test_files["same_size"]))
        assert result is CompareResult.DIFFERENT

    def test_length_mismatch_is_different(self, tmp_path):
        """A file that is a prefix of another is not identical to it."""
        short = tmp_path / "short"
        long = tmp_path / "long"
        short.write_bytes(b"abc")
        long.write_bytes(b"abcdef")

        comparator = ContentComparatorImpl(chunk_size=2)
        assert comparator.compare(str(short), str(long)) is CompareResult.DIFFERENT
        assert comparator.compare(str(long), str(short)) is CompareResult.DIFFERENT

    def test_two_empty_files_are_equal(self, test_files):
        comparator = ContentComparatorImpl()
        result = comparator.compare(str(test_files["empty1"]), str(test_files["empty2"]))
        assert result is CompareResult.EQUAL

    @pytest.mark.parametrize("chunk_size", [1, 7, 1024, 4096])
    def test_chunk_size_does_not_change_the_answer(self, tmp_path, chunk_size):
        """Files spanning several chunks compare the same whatever the chunk size."""
        content = bytes(range(256)) * 20
        a = tmp_path / "a"
        b = tmp_path / "b"
        c = tmp_path / "c"
        a.write_bytes(content)
        b.write_bytes(content)
        c.write_bytes(content[:-1] + b"\xff")

        comparator = ContentComparatorImpl(chunk_size=chunk_size)
        assert comparator.compare(str(a), str(b)) is CompareResult.EQUAL
        assert comparator.compare(str(a), str(c)) is CompareResult.DIFFERENT

    def test_missing_file_is_unreadable(self, test_files, tmp_path):
        """Unreadable pairs are reported, never raised."""
        comparator = ContentComparatorImpl()
        missing = tmp_path / "missing.txt"
        assert comparator.compare(str(test_files["dup1_a"]), str(missing)) is CompareResult.UNREADABLE
        assert comparator.compare(str(missing), str(test_files["dup1_a"])) is CompareResult.UNREADABLE

    def test_permission_error_is_unreadable(self, test_files):
        comparator = ContentComparatorImpl()
        with mock.patch.object(FileService, "open_binary", side_effect=PermissionError("denied")):
            result = comparator.compare(str(test_files["dup1_a"]), str(test_files["dup1_b"]))
        assert result is CompareResult.UNREADABLE

    def test_rejects_non_positive_chunk_size(self):
        with pytest.raises(ValueError, match="Chunk size must be positive"):
            ContentComparatorImpl(chunk_size=0)
