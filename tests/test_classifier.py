"""
Unit tests for ClassifierImpl.
Verifies that only files sharing size, device and the configured metadata end up together.
"""
import pytest
from onelink.core.classifier import ClassifierImpl
from onelink.core.models import EquivalenceClass, EquivalenceKey, FileRef, LinkParams


def ref(path, size, inode, owner=1000, group=1000, mode=0o644, device=1, order=0):
    return FileRef(path=path, directory="/", inode=inode, size=size, device=device,
                   owner=owner, group=group, mode=mode, order=order)


class TestClassifierImpl:
    """Test grouping of candidates into equivalence classes."""

    def test_groups_by_size(self, params):
        files = [
            ref("/a.txt", 1024, 1),
            ref("/b.txt", 1024, 2),
            ref("/c.txt", 2048, 3),
        ]
        classes = ClassifierImpl().group(files, params)

        assert len(classes) == 2
        assert [f.path for f in classes[0].files] == ["/a.txt", "/b.txt"]
        assert [f.path for f in classes[1].files] == ["/c.txt"]
        assert classes[0].is_candidate()
        assert not classes[1].is_candidate()

    def test_different_devices_never_share_a_class(self, params):
        """Hard links cannot cross devices, so such files are never compared."""
        files = [ref("/a", 10, 1, device=1), ref("/b", 10, 2, device=2)]
        classes = ClassifierImpl().group(files, params)
        assert len(classes) == 2

    @pytest.mark.parametrize("field,flag", [
        ("owner", "ignore_owner"),
        ("group", "ignore_group"),
        ("mode", "ignore_permissions"),
    ])
    def test_metadata_splits_unless_ignored(self, field, flag):
        a = ref("/a", 10, 1)
        b = ref("/b", 10, 2, **{field: 0o600 if field == "mode" else 0})

        assert len(ClassifierImpl().group([a, b], LinkParams())) == 2
        assert len(ClassifierImpl().group([a, b], LinkParams(**{flag: True}))) == 1

    def test_members_keep_discovery_order(self, params):
        files = [ref(f"/f{i}", 10, i, order=i) for i in range(5)]
        classes = ClassifierImpl().group(files, params)
        assert [f.order for f in classes[0].files] == [0, 1, 2, 3, 4]

    def test_classes_in_order_of_first_appearance(self, params):
        files = [ref("/big", 20, 1), ref("/small", 10, 2), ref("/big2", 20, 3)]
        classes = ClassifierImpl().group(files, params)
        assert [c.key.size for c in classes] == [20, 10]

    def test_zero_length_files_skipped_when_configured(self):
        files = [ref("/e1", 0, 1), ref("/e2", 0, 2), ref("/x", 5, 3)]

        kept = ClassifierImpl().group(files, LinkParams())
        assert sum(c.member_count for c in kept) == 3

        skipped = ClassifierImpl().group(files, LinkParams(ignore_zero_length=True))
        assert sum(c.member_count for c in skipped) == 1

    def test_classify_updates_mapping_in_place(self, params):
        classes = {}
        classifier = ClassifierImpl()
        result = classifier.classify(ref("/a", 10, 1), classes, params)
        classifier.classify(ref("/b", 10, 2), classes, params)

        assert result is classes
        assert len(classes) == 1
        key = EquivalenceKey(size=10, device=1, owner=1000, group=1000, mode=0o644)
        assert classes[key].member_count == 2


class TestEquivalenceClass:
    def test_add_file_rejects_foreign_size(self):
        eq_class = EquivalenceClass(key=EquivalenceKey(size=10, device=1))
        with pytest.raises(ValueError, match="different key"):
            eq_class.add_file(ref("/a", 11, 1))
