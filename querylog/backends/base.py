import logging
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DatabaseAdapter(Protocol):
    """
    Operations a database adapter offers to the rest of the site.

    Anything implementing every method can be wrapped by
    `querylog.proxy.DatabaseProxy`, and the proxy itself implements them all
    so it can be used wherever an adapter is expected.
    """

    def get_schema_manager(self) -> Any: ...

    def get_query_builder(self) -> Any: ...

    def query(self, sql: str, error_level: int = logging.ERROR) -> Any: ...

    def prepared_query(self, sql: str, parameters, error_level: int = logging.ERROR) -> Any: ...

    def get_generated_id(self, table: str) -> int | None: ...

    def is_active(self) -> bool: ...

    def escape_string(self, value) -> str: ...

    def quote_string(self, value) -> str: ...

    def escape_identifier(self, value: str, separator: str = ".") -> str: ...

    def comparison_clause(
        self, field, value, exact=False, negate=False, case_sensitive=None, parameterised=False
    ) -> str: ...

    def formatted_datetime_clause(self, date: str, format: str) -> str: ...

    def datetime_interval_clause(self, date: str, interval: str) -> str: ...

    def datetime_difference_clause(self, date1: str, date2: str) -> str: ...

    def supports_collations(self) -> bool: ...

    def supports_timezone_override(self) -> bool: ...

    def get_version(self) -> str: ...

    def get_database_server(self) -> str: ...

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
    ) -> Any: ...

    def supports_transactions(self) -> bool: ...

    def transaction_start(self, transaction_mode=False, session_characteristics=False) -> Any: ...

    def transaction_savepoint(self, savepoint: str) -> Any: ...

    def transaction_rollback(self, savepoint=False) -> Any: ...

    def transaction_end(self, chain=False) -> Any: ...

    def get_selected_database(self) -> str | None: ...

    def now(self) -> str: ...

    def random(self) -> str: ...

    # Deprecated schema helpers, prefer the schema manager.
    def create_database(self) -> Any: ...

    def get_connect(self, parameters) -> Any: ...

    def create_table(self, table, fields=None, indexes=None, options=None, advanced_options=None) -> Any: ...

    def alter_table(
        self,
        table,
        new_fields=None,
        new_indexes=None,
        altered_fields=None,
        altered_indexes=None,
        altered_options=None,
        advanced_options=None,
    ) -> Any: ...

    def rename_table(self, old_table_name, new_table_name) -> Any: ...

    def create_field(self, table, field, spec) -> Any: ...

    def rename_field(self, table_name, old_name, new_name) -> Any: ...

    def field_list(self, table) -> dict: ...

    def table_list(self) -> list: ...

    def has_table(self, table_name) -> bool: ...

    def enum_values_for_field(self, table_name, field_name) -> list: ...

    def addslashes(self, value) -> str: ...


ADAPTER_METHODS = frozenset(
    name for name, value in vars(DatabaseAdapter).items() if callable(value) and not name.startswith("_")
)
