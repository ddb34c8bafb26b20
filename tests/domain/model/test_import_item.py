from __future__ import annotations

import itertools
from decimal import Decimal
from pathlib import Path  # noqa: TC003

import pytest

from bulkimport.domain.errors import InvalidVersionLabelError, OutOfOrderBatchError
from bulkimport.domain.model import (
    ImportItem,
    MetadataRecord,
    VersionEntry,
    VersionSetBuilder,
    split_path_elements,
)
from tests.helpers.import_files import (
    DictPathResolver,
    RecordingMetadataLoader,
    content,
    make_dir,
    metadata,
    write_file,
)


def _numbers(item: ImportItem) -> list[Decimal | None]:
    return [version.version_number for version in item.versions]


def test_grouping_is_order_independent(tmp_path: Path) -> None:
    files = [
        content(write_file(tmp_path, "doc.txt.v1", b"a"), "1"),
        metadata(write_file(tmp_path, "doc.txt.metadata.v1"), "1"),
        content(write_file(tmp_path, "doc.txt.v2", b"bb"), "2"),
        metadata(write_file(tmp_path, "doc.txt.metadata.v2"), "2"),
        content(write_file(tmp_path, "doc.txt", b"ccc")),
    ]

    for ordering in itertools.permutations(files):
        item = ImportItem.from_files(
            "doc.txt", ordering, metadata_loader=RecordingMetadataLoader()
        )

        assert _numbers(item) == [Decimal(1), Decimal(2), None]
        assert [version.has_content for version in item.versions] == [True, True, True]
        assert [version.has_metadata for version in item.versions] == [True, True, False]


def test_unversioned_entry_sorts_last(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc.txt", b"x")
    item = ImportItem.from_files(
        "doc.txt",
        [content(path), content(path, "2"), content(path, "1")],
    )

    assert _numbers(item) == [Decimal(1), Decimal(2), None]
    assert list(item) == list(item.versions)
    assert len(item) == 3


def test_equal_numbers_share_one_version(tmp_path: Path) -> None:
    data = write_file(tmp_path, "doc.txt.v1", b"x")
    meta = write_file(tmp_path, "doc.txt.metadata.v1")

    item = ImportItem.from_files(
        "doc.txt",
        [content(data, "1.1"), metadata(meta, "1.10")],
        metadata_loader=RecordingMetadataLoader(),
    )

    assert item.number_of_versions() == 1
    version = item.versions[0]
    assert version.content_file == data
    assert version.metadata_file == meta


def test_invalid_label_fails_construction(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc.txt.vx")

    with pytest.raises(InvalidVersionLabelError) as exc:
        ImportItem.from_files("doc.txt", [content(path, "x")])

    assert exc.value.path == path
    assert exc.value.item_name == "doc.txt"


def test_underscored_label_is_not_merged_with_its_digits(tmp_path: Path) -> None:
    files = [
        content(write_file(tmp_path, "doc.txt.v10", b"x"), "10"),
        content(write_file(tmp_path, "doc.txt.v1_0", b"y"), "1_0"),
    ]

    with pytest.raises(InvalidVersionLabelError) as exc:
        ImportItem.from_files("doc.txt", files)

    assert exc.value.label == "1_0"


def test_metadata_without_loader_fails_at_fold_time(tmp_path: Path) -> None:
    files = [
        content(write_file(tmp_path, "doc.txt", b"x"), "1"),
        metadata(write_file(tmp_path, "doc.txt.metadata"), "1"),
    ]

    with pytest.raises(ValueError, match="requires a metadata loader"):
        ImportItem.from_files("doc.txt", files)


def test_name_and_versions_are_required(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc.txt")

    with pytest.raises(ValueError, match="empty or blank"):
        ImportItem.from_files("   ", [content(path)])
    with pytest.raises(ValueError, match="at least one version"):
        ImportItem.from_files("doc.txt", [])


def test_duplicate_version_numbers_are_rejected(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc.txt")
    versions = [
        VersionEntry(Decimal(1), content_file=path),
        VersionEntry(Decimal("1.0"), content_file=path),
    ]

    with pytest.raises(ValueError, match="unique version numbers"):
        ImportItem("doc.txt", versions)


def test_builder_upsert_returns_same_version(tmp_path: Path) -> None:
    builder = VersionSetBuilder("doc.txt", metadata_loader=RecordingMetadataLoader())
    first = builder.upsert(content(write_file(tmp_path, "doc.txt.v3", b"x"), "3"))
    second = builder.upsert(metadata(write_file(tmp_path, "doc.txt.metadata.v3"), "3"))

    assert first is second
    assert builder.build() == (first,)


def test_size_sums_content_versions_only(tmp_path: Path) -> None:
    item = ImportItem.from_files(
        "thing",
        [
            content(write_file(tmp_path, "v1", b"x" * 100), "1"),
            content(write_file(tmp_path, "v2", b"x" * 250), "2"),
            content(make_dir(tmp_path, "v3"), "3"),
        ],
    )

    assert item.size_in_bytes() == 350
    assert item.number_of_versions() == 3


def test_directory_flag_reflects_newest_version(tmp_path: Path) -> None:
    older_file = content(write_file(tmp_path, "v1", b"x"), "1")
    newer_dir = content(make_dir(tmp_path, "v2"), "2")
    assert ImportItem.from_files("thing", [older_file, newer_dir]).is_directory() is True

    older_file = content(write_file(tmp_path, "w2", b"x"), "2")
    newer_dir = content(make_dir(tmp_path, "w1"), "3")
    assert ImportItem.from_files("thing", [older_file, newer_dir]).is_directory() is True

    newer_file = content(write_file(tmp_path, "u2", b"x"), "2")
    older_dir = content(make_dir(tmp_path, "u1"), "1")
    assert ImportItem.from_files("thing", [older_dir, newer_file]).is_directory() is False


def test_directory_flag_skips_metadata_only_versions(tmp_path: Path) -> None:
    item = ImportItem.from_files(
        "folder",
        [
            content(make_dir(tmp_path, "folder"), "1"),
            metadata(write_file(tmp_path, "folder.metadata"), "2"),
        ],
        metadata_loader=RecordingMetadataLoader(),
    )

    assert item.is_directory() is True


def test_directory_flag_defaults_to_false(tmp_path: Path) -> None:
    item = ImportItem.from_files(
        "folder",
        [metadata(write_file(tmp_path, "folder.metadata"))],
        metadata_loader=RecordingMetadataLoader(),
    )

    assert item.is_directory() is False


def test_namespace_and_parent_association_precedence(tmp_path: Path) -> None:
    oldest = write_file(tmp_path, "doc.metadata.v1")
    newest = write_file(tmp_path, "doc.metadata.v2")
    loader = RecordingMetadataLoader(
        records={
            oldest: MetadataRecord.build(namespace="ns1", parent_association_type="assocA"),
            newest: MetadataRecord.build(namespace="ns2"),
        }
    )
    item = ImportItem.from_files(
        "doc",
        [metadata(newest, "2"), metadata(oldest, "1")],
        metadata_loader=loader,
    )

    assert item.namespace() == "ns2"
    assert item.parent_association_type() == "assocA"


def test_parent_association_from_oldest_when_versions_disagree(tmp_path: Path) -> None:
    paths = [write_file(tmp_path, f"doc.metadata.v{n}") for n in (1, 2, 3)]
    loader = RecordingMetadataLoader(
        records={
            paths[0]: MetadataRecord.build(namespace=None),
            paths[1]: MetadataRecord.build(parent_association_type="cm:older", namespace="ns-mid"),
            paths[2]: MetadataRecord.build(parent_association_type="cm:newer"),
        }
    )
    item = ImportItem.from_files(
        "doc",
        [metadata(path, str(n)) for n, path in enumerate(paths, start=1)],
        metadata_loader=loader,
    )

    assert item.parent_association_type() == "cm:older"
    assert item.namespace() == "ns-mid"


def test_metadata_queries_without_metadata_return_none(tmp_path: Path) -> None:
    item = ImportItem.from_files("doc", [content(write_file(tmp_path, "doc", b"x"))])

    assert item.namespace() is None
    assert item.parent_association_type() is None
    assert item.number_of_metadata_properties() == 0


def test_number_of_metadata_properties(tmp_path: Path) -> None:
    first = write_file(tmp_path, "doc.metadata.v1")
    second = write_file(tmp_path, "doc.metadata.v2")
    loader = RecordingMetadataLoader(
        records={
            first: MetadataRecord.build(properties={"cm:title": "A", "cm:author": "B"}),
            second: MetadataRecord.build(properties={"cm:title": "C"}),
        }
    )
    item = ImportItem.from_files(
        "doc",
        [
            metadata(first, "1"),
            metadata(second, "2"),
            content(write_file(tmp_path, "doc", b"x")),
        ],
        metadata_loader=loader,
    )

    assert item.number_of_metadata_properties() == 3
    assert item.number_of_metadata_properties() == 3
    assert sorted(loader.calls) == sorted([first, second])


@pytest.mark.parametrize(
    ("relative_path", "expected"),
    [
        (None, ()),
        ("", ()),
        ("a/b/c", ("a", "b", "c")),
        ("a\\b/c", ("a", "b", "c")),
        ("/a//b/", ("a", "b")),
    ],
)
def test_split_path_elements(relative_path: str | None, expected: tuple[str, ...]) -> None:
    assert split_path_elements(relative_path) == expected


def test_resolve_parent_without_relative_path_uses_default(tmp_path: Path) -> None:
    resolver = DictPathResolver()
    item = ImportItem.from_files("doc", [content(write_file(tmp_path, "doc", b"x"))])

    assert item.resolve_parent(("root",), resolver) is None
    assert resolver.calls == []


def test_resolve_parent_returns_existing_folder(tmp_path: Path) -> None:
    resolver = DictPathResolver(existing={("a",), ("a", "b")})
    item = ImportItem.from_files(
        "doc",
        [content(write_file(tmp_path, "doc", b"x"))],
        target_relative_path="a\\b",
    )

    assert item.resolve_parent(("root",), resolver) == ("root", "a", "b")
    assert resolver.calls == [(("a", "b"), False)]


def test_resolve_parent_detects_out_of_order_batch(tmp_path: Path) -> None:
    resolver = DictPathResolver(existing={("a",)})
    item = ImportItem.from_files(
        "doc",
        [content(write_file(tmp_path, "doc", b"x"))],
        target_relative_path="a/b/c",
    )

    with pytest.raises(OutOfOrderBatchError) as exc:
        item.resolve_parent(("root",), resolver)

    assert exc.value.relative_path == "a/b/c"
    assert resolver.calls == [(("a", "b", "c"), False)]


def test_resolve_parent_maps_not_found_to_out_of_order(tmp_path: Path) -> None:
    resolver = DictPathResolver(raise_not_found=True)
    item = ImportItem.from_files(
        "doc",
        [content(write_file(tmp_path, "doc", b"x"))],
        target_relative_path="a/b",
    )

    with pytest.raises(OutOfOrderBatchError) as exc:
        item.resolve_parent(("root",), resolver)

    assert isinstance(exc.value.__cause__, FileNotFoundError)


def test_str_reports_version_count(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc", b"x")

    assert str(ImportItem.from_files("doc", [content(path)])) == "doc (1 version)"
    assert str(ImportItem.from_files("doc", [content(path), content(path, "1")])) == (
        "doc (2 versions)"
    )
