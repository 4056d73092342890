import dataclasses
import logging

from django.db import DatabaseError


logger = logging.getLogger(__name__)


RANDOM_FUNCTIONS = {
    "mysql": "RAND()",
    "oracle": "DBMS_RANDOM.VALUE",
    "postgresql": "RANDOM()",
    "sqlite": "RANDOM()",
}


@dataclasses.dataclass
class QueryResult:
    columns: list
    rows: list
    rowcount: int
    lastrowid: int | None = None

    @classmethod
    def from_cursor(cls, cursor):
        if cursor.description is None:
            columns, rows = [], []
        else:
            columns = [col[0] for col in cursor.description]
            rows = cursor.fetchall()
        return cls(
            columns=columns,
            rows=rows,
            rowcount=cursor.rowcount,
            lastrowid=getattr(cursor, "lastrowid", None),
        )

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)


class DjangoDatabaseAdapter:
    """
    Database adapter on top of a Django connection.

    SQL is executed as given, with Django `%s` placeholders for parameters.
    Helpers generating vendor specific SQL have no Django counterpart and
    raise `NotImplementedError`.
    """

    def __init__(self, connection):
        self.connection = connection
        self._last_result = None

    def _execute(self, sql, params, error_level):
        with self.connection.cursor() as cursor:
            try:
                cursor.execute(sql, params)
            except DatabaseError:
                if error_level >= logging.ERROR:
                    raise
                logger.log(error_level, "Query failed: %s", sql, exc_info=True)
                return None
            self._last_result = QueryResult.from_cursor(cursor)
        return self._last_result

    def _not_supported(self, name):
        return NotImplementedError(f"{name}() is not supported on Django connections ({self.connection.vendor}).")

    def get_schema_manager(self):
        return self.connection.schema_editor()

    def get_query_builder(self):
        return self.connection.ops

    def query(self, sql, error_level=logging.ERROR):
        return self._execute(sql, None, error_level)

    def prepared_query(self, sql, parameters, error_level=logging.ERROR):
        return self._execute(sql, list(parameters), error_level)

    def get_generated_id(self, table):
        if self.connection.vendor == "postgresql":
            # psycopg cursors have no lastrowid, ask the sequence behind the `id` column.
            with self.connection.cursor() as cursor:
                cursor.execute("SELECT currval(pg_get_serial_sequence(%s, %s))", [table, "id"])
                [generated_id] = cursor.fetchone()
            return generated_id
        # As reported by the driver for the last query, whatever the table.
        if self._last_result is None:
            return None
        return self._last_result.lastrowid

    def is_active(self):
        return self.connection.connection is not None and self.connection.is_usable()

    def escape_string(self, value):
        value = str(value)
        if self.connection.vendor == "mysql":
            # Backslash is an escape character unless NO_BACKSLASH_ESCAPES is set.
            value = value.replace("\\", "\\\\")
        return value.replace("'", "''")

    def quote_string(self, value):
        return f"'{self.escape_string(value)}'"

    def escape_identifier(self, value, separator="."):
        return separator.join(self.connection.ops.quote_name(part) for part in value.split(separator))

    def comparison_clause(self, field, value, exact=False, negate=False, case_sensitive=None, parameterised=False):
        raise self._not_supported("comparison_clause")

    def formatted_datetime_clause(self, date, format):
        raise self._not_supported("formatted_datetime_clause")

    def datetime_interval_clause(self, date, interval):
        raise self._not_supported("datetime_interval_clause")

    def datetime_difference_clause(self, date1, date2):
        raise self._not_supported("datetime_difference_clause")

    def supports_collations(self):
        return self.connection.features.supports_collation_on_charfield

    def supports_timezone_override(self):
        return self.connection.features.supports_timezones

    def get_version(self):
        return ".".join(str(part) for part in self.connection.get_database_version())

    def get_database_server(self):
        return self.connection.vendor

    def search_engine(
        self,
        classes_to_search,
        keywords,
        start,
        page_length,
        sort_by="Relevance DESC",
        extra_filter="",
        boolean_search=False,
        alternative_file_filter="",
        inverted_match=False,
    ):
        raise self._not_supported("search_engine")

    def supports_transactions(self):
        return self.connection.features.supports_transactions

    def transaction_start(self, transaction_mode=False, session_characteristics=False):
        if transaction_mode or session_characteristics:
            raise self._not_supported("transaction_start(transaction_mode, session_characteristics)")
        self.connection.set_autocommit(False)

    def _execute_savepoint_sql(self, sql):
        with self.connection.cursor() as cursor:
            cursor.execute(sql)

    def transaction_savepoint(self, savepoint):
        self._execute_savepoint_sql(self.connection.ops.savepoint_create_sql(savepoint))

    def transaction_rollback(self, savepoint=False):
        if savepoint:
            self._execute_savepoint_sql(self.connection.ops.savepoint_rollback_sql(savepoint))
        else:
            self.connection.rollback()

    def transaction_end(self, chain=False):
        self.connection.commit()
        if not chain:
            self.connection.set_autocommit(True)

    def get_selected_database(self):
        return self.connection.settings_dict.get("NAME") or None

    def now(self):
        return "CURRENT_TIMESTAMP"

    def random(self):
        try:
            return RANDOM_FUNCTIONS[self.connection.vendor]
        except KeyError:
            raise self._not_supported("random") from None

    def create_database(self):
        raise self._not_supported("create_database")

    def get_connect(self, parameters):
        raise self._not_supported("get_connect")

    def create_table(self, table, fields=None, indexes=None, options=None, advanced_options=None):
        if indexes or options or advanced_options:
            raise self._not_supported("create_table(indexes, options, advanced_options)")
        quote_name = self.connection.ops.quote_name
        definition = ", ".join(f"{quote_name(name)} {spec}" for name, spec in (fields or {}).items())
        with self.get_schema_manager() as editor:
            editor.execute(editor.sql_create_table % {"table": quote_name(table), "definition": definition})

    def alter_table(
        self,
        table,
        new_fields=None,
        new_indexes=None,
        altered_fields=None,
        altered_indexes=None,
        altered_options=None,
        advanced_options=None,
    ):
        raise self._not_supported("alter_table")

    def rename_table(self, old_table_name, new_table_name):
        quote_name = self.connection.ops.quote_name
        with self.get_schema_manager() as editor:
            editor.execute(
                editor.sql_rename_table
                % {"old_table": quote_name(old_table_name), "new_table": quote_name(new_table_name)}
            )

    def create_field(self, table, field, spec):
        quote_name = self.connection.ops.quote_name
        with self.get_schema_manager() as editor:
            editor.execute(
                editor.sql_create_column
                % {"table": quote_name(table), "column": quote_name(field), "definition": spec}
            )

    def rename_field(self, table_name, old_name, new_name):
        quote_name = self.connection.ops.quote_name
        with self.get_schema_manager() as editor:
            editor.execute(
                editor.sql_rename_column
                % {
                    "table": quote_name(table_name),
                    "old_column": quote_name(old_name),
                    "new_column": quote_name(new_name),
                }
            )

    def field_list(self, table):
        with self.connection.cursor() as cursor:
            description = self.connection.introspection.get_table_description(cursor, table)
        return {
            field.name: self.connection.introspection.get_field_type(field.type_code, field) for field in description
        }

    def table_list(self):
        return self.connection.introspection.table_names()

    def has_table(self, table_name):
        return table_name in self.table_list()

    def enum_values_for_field(self, table_name, field_name):
        raise self._not_supported("enum_values_for_field")

    def addslashes(self, value):
        return self.escape_string(value)
