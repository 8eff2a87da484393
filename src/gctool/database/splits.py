"""Splits repository."""

import logging

from gctool.database.base import Repository
from gctool.database.mappers import split_from_row, split_to_params
from gctool.database.query import SplitQuery
from gctool.domain.entities import Split
from gctool.domain.errors import NotFoundError, split_not_found

logger = logging.getLogger(__name__)


class SplitsRepository(Repository):
    """Reads and updates rows of the ``splits`` table."""

    def get(self, guid: str) -> Split:
        rows = self._fetch_query(SplitQuery().where("guid = ?", guid).limit(1))
        if not rows:
            raise NotFoundError(split_not_found(guid))
        return split_from_row(rows[0])

    def all(self, query: SplitQuery) -> list[Split]:
        return [split_from_row(row) for row in self._fetch_query(query)]

    def update(self, split: Split) -> None:
        """Write every stored column of ``split``.

        ``split.account`` is a read-side snapshot and is not written. Raises
        NotFoundError when no row has the split's guid.
        """
        sql = """
UPDATE splits
SET
\ttx_guid = ?,
\taccount_guid = ?,
\tmemo = ?,
\taction = ?,
\treconcile_state = ?,
\treconcile_date = ?,
\tvalue_num = ?,
\tvalue_denom = ?,
\tquantity_num = ?,
\tquantity_denom = ?,
\tlot_guid = ?
WHERE guid = ?
"""
        if self._execute(sql, split_to_params(split)) == 0:
            raise NotFoundError(split_not_found(split.guid))
        logger.debug("updated split %s -> account %s", split.guid, split.account_guid)
