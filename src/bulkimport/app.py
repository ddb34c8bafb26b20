"""Application orchestration entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bulkimport.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from bulkimport.config import configure_logging, load_env_file

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from bulkimport.domain.model import ImportItem
    from bulkimport.domain.ports.target import TargetRepository
    from bulkimport.domain.ports.unit_of_work import ImportUnitOfWork

type UnitOfWorkFactory = Callable[[], ImportUnitOfWork]


log = logging.getLogger(__name__)


@dataclass(slots=True)
class ImportItemResult:
    """Outcome of replaying one item into the target repository."""

    node: Any
    created: bool
    versions_written: int
    bytes_written: int
    metadata_properties: int


def bootstrap(
    *,
    env_file: Path | str | None = None,
    level: int | None = None,
    database_uri: str | None = None,
) -> None:
    """Load the env file, configure logging and start the SQLAlchemy adapter.

    Without ``level`` the ``BULKIMPORT_LOG_LEVEL`` setting applies (default INFO).
    """

    load_env_file(env_file)
    configure_logging(level=level)
    if not is_started():
        startup(database_uri=database_uri)


def import_item[TNode](
    item: ImportItem,
    *,
    repository: TargetRepository[TNode],
    target_root: TNode,
) -> ImportItemResult:
    """Replay ``item`` and its versions, oldest first, below ``target_root``.

    ``OutOfOrderBatchError`` propagates when the item's parent folder has not
    been imported yet.
    """

    log.info("Importing %s", item)
    parent = item.resolve_parent(target_root, repository)
    if parent is None:
        parent = target_root

    node = repository.get_child(parent, item.name)
    created = node is None
    if node is None:
        newest_type = _newest_type(item)
        node = repository.create_node(
            parent,
            item.name,
            is_folder=item.is_directory(),
            content_type=newest_type,
            namespace=item.namespace(),
            parent_association_type=item.parent_association_type(),
        )

    versions_written = 0
    bytes_written = 0
    for version in item.versions:
        metadata = version.get_raw_metadata() if version.has_metadata else None
        writer = repository.new_version(
            node,
            version_number=version.version_number,
            metadata=metadata,
        )
        if version.has_content:
            version.put_content(writer)
            bytes_written += version.size_in_bytes
        versions_written += 1

    result = ImportItemResult(
        node=node,
        created=created,
        versions_written=versions_written,
        bytes_written=bytes_written,
        metadata_properties=item.number_of_metadata_properties(),
    )
    log.info(
        "Finished importing %s: created=%s, versions=%s, bytes=%s, properties=%s",
        item.name,
        result.created,
        result.versions_written,
        result.bytes_written,
        result.metadata_properties,
    )
    return result


def import_item_with_unit_of_work(
    item: ImportItem,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ImportItemResult:
    """Replay ``item`` below the repository root inside one committed unit of work."""

    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    with effective_uow() as uow:
        repository = uow.repositories.target
        result = import_item(item, repository=repository, target_root=repository.root())
        uow.commit()
    return result


def _newest_type(item: ImportItem) -> str | None:
    for version in item.newest_first():
        if version.has_metadata:
            content_type = version.get_type()
            if content_type is not None:
                return content_type
    return None
