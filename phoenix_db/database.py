"""
Database

A Connection with table-level helpers: read queries returning rows in
several shapes, and INSERT / UPDATE / DELETE statements built from records.

SQL BUILDING RULES:
-------------------
1. Values are always bound parameters, never interpolated
2. Table and field names are wrapped in backticks; a name containing a
   backtick is rejected before the database is touched
3. Every record of a batch carries the same fields
4. A batch runs in one transaction, rolled back on any failure
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Union

from phoenix_db.adapters.base import Parameters
from phoenix_db.connection import Connection
from phoenix_db.errors import (
    illegal_character,
    invalid_records,
    missing_primary_key_field,
    no_primary_key,
)
from phoenix_db.query import Query

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Records = Union[Mapping, Iterable]

IDENTIFIER_QUOTE = "`"


def check_identifier(kind: str, name: str) -> str:
    """
    Reject a table/field name containing the identifier quote.

    Raises:
        IllegalCharacterError
    """
    if IDENTIFIER_QUOTE in str(name):
        raise illegal_character(kind, name)
    return name


def quote_identifier(name: str) -> str:
    return f"{IDENTIFIER_QUOTE}{name}{IDENTIFIER_QUOTE}"


def _as_batch(records: Records) -> List[Mapping]:
    if isinstance(records, Mapping):
        return [records]
    if isinstance(records, (str, bytes)) or not isinstance(records, Iterable):
        raise invalid_records("expected a record or a list of records")

    batch = list(records)
    for index, record in enumerate(batch):
        if not isinstance(record, Mapping):
            raise invalid_records("record is not a mapping", index)
    return batch


def _batch_fields(batch: List[Mapping]) -> List[str]:
    """Field names of the batch, in the first record's order."""
    fields = list(batch[0].keys())
    if not fields:
        raise invalid_records("record has no fields", 0)

    for record in batch:
        for field in record.keys():
            check_identifier("field", field)

    return fields


def _check_uniform(batch: List[Mapping], fields: List[str]) -> None:
    expected = set(fields)
    for index, record in enumerate(batch[1:], start=1):
        if set(record.keys()) != expected:
            raise invalid_records("records do not share the same fields", index)


class Database(Connection):
    """
    Connection with table helpers.

    Example:
        db = Database("sqlite::memory:")
        db.get_field("SELECT COUNT(*) FROM users")

        user_id = db.insert("users", {"name": "Ann"})
        db.update("users", {"id": user_id, "name": "Anna"})
        db.delete("users", [user_id])
    """

    # Rows affected by the last update/delete
    last_row_count: int = -1

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_record(self, sql: str, params: Parameters = None) -> Optional[Record]:
        """First row returned by the query, or None."""
        return Query.get_record(sql, params, connection=self)

    def get_records(self, sql: str, params: Parameters = None) -> List[Record]:
        """All rows returned by the query."""
        return Query.get_records(sql, params, connection=self)

    def get_field(self, sql: str, params: Parameters = None) -> Any:
        """First field of the first row, or None."""
        return Query.get_field(sql, params, connection=self)

    def get_fields(self, sql: str, params: Parameters = None) -> List[Any]:
        """First field of every row."""
        return Query.get_fields(sql, params, connection=self)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, table: str, records: Records) -> Union[Any, List[Any]]:
        """
        Insert records in a table.

        Args:
            table: Table name
            records: A single record, or a list of records with the same fields

        Returns:
            The inserted id for a single record, the list of inserted ids
            (input order) for a list

        Raises:
            IllegalCharacterError: A table/field name contains a backtick
            InvalidRecordsError: Records are malformed or not uniform
            QueryError: The driver failed; the whole batch is rolled back
        """
        check_identifier("table", table)

        single = isinstance(records, Mapping)
        batch = _as_batch(records)
        if not batch:
            return []

        fields = _batch_fields(batch)
        _check_uniform(batch, fields)
        fields_clause = ", ".join(quote_identifier(field) for field in fields)
        values_clause = ", ".join("?" for _ in fields)
        sql = f"INSERT INTO {quote_identifier(table)} ({fields_clause}) VALUES ({values_clause})"

        insert_ids = []
        with self.transaction(), Query(self, sql) as query:
            for record in batch:
                query.execute([record[field] for field in fields])
                insert_ids.append(query.last_insert_id)

        logger.debug(f"Inserted {len(insert_ids)} record(s) in {table}")
        return insert_ids[0] if single else insert_ids

    def update(self, table: str, records: Records) -> bool:
        """
        Update records in a table, matched on its primary key.

        Args:
            table: Table name
            records: A single record, or a list of records with the same
                     fields; each must carry the primary key

        Returns:
            True if every statement succeeded

        Raises:
            IllegalCharacterError: A table/field name contains a backtick
            InvalidRecordsError: Records are malformed, not uniform, or only hold the key
            NoPrimaryKeyError: The table has no primary key
            MissingPrimaryKeyFieldError: A record lacks the primary key
            QueryError: The driver failed; the whole batch is rolled back
        """
        check_identifier("table", table)

        batch = _as_batch(records)
        if not batch:
            self.last_row_count = 0
            return True

        fields = _batch_fields(batch)
        primary_key = self.get_primary_key(table)

        for index, record in enumerate(batch):
            if record.get(primary_key) is None:
                raise missing_primary_key_field(primary_key, index)

        _check_uniform(batch, fields)

        set_fields = [field for field in fields if field != primary_key]
        if not set_fields:
            raise invalid_records(f"no field to update besides '{primary_key}'")

        set_clause = ", ".join(
            f"{quote_identifier(field)} = :param_{index}" for index, field in enumerate(set_fields)
        )
        sql = f"UPDATE {quote_identifier(table)} SET {set_clause} WHERE {quote_identifier(primary_key)} = :key"

        result = True
        affected = 0
        with self.transaction(), Query(self, sql) as query:
            for record in batch:
                params = {f"param_{index}": record[field] for index, field in enumerate(set_fields)}
                params["key"] = record[primary_key]
                result = query.execute(params) and result
                affected += max(query.row_count, 0)

        self.last_row_count = affected
        return result

    def delete(self, table: str, ids: Any) -> bool:
        """
        Delete rows by primary key.

        Args:
            table: Table name
            ids: Primary key values (a single scalar is accepted)

        Returns:
            True if the statement succeeded

        Raises:
            IllegalCharacterError: The table name contains a backtick
            NoPrimaryKeyError: The table has no primary key
            QueryError: The driver failed
        """
        check_identifier("table", table)
        primary_key = self.get_primary_key(table)

        if isinstance(ids, (str, bytes)) or not isinstance(ids, Iterable):
            ids = [ids]
        ids = list(ids)
        if not ids:
            self.last_row_count = 0
            return True

        placeholder = ", ".join("?" for _ in ids)
        sql = f"DELETE FROM {quote_identifier(table)} WHERE {quote_identifier(primary_key)} IN ({placeholder})"

        with Query(self, sql) as query:
            result = query.execute(ids)
            self.last_row_count = query.row_count
        return result

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def get_primary_key(self, table: str) -> str:
        """
        Primary key column of a table (the first one of a composite key).

        Raises:
            IllegalCharacterError: The table name contains a backtick
            NoPrimaryKeyError: The table has no primary key
        """
        check_identifier("table", table)
        primary_key = self.adapter.get_primary_key(table)
        if primary_key is None:
            raise no_primary_key(table)
        return check_identifier("field", primary_key)
