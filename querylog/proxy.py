import dataclasses
import logging
import threading
import time


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class QueryLogEntry:
    query: str
    # Milliseconds, rounded to 2 decimals.
    duration: float

    def as_dict(self):
        return dataclasses.asdict(self)


class DatabaseProxy:
    """
    Wrap the real database adapter, passing on every call and logging the
    executed queries with their duration for the profiling tools.

    Only `query()` and `prepared_query()` are timed. A query raising an
    exception is not logged and the exception reaches the caller untouched.
    """

    def __init__(self, real_conn):
        self.real_conn = real_conn
        self._queries = []
        self._lock = threading.Lock()

    def get_queries(self):
        with self._lock:
            return list(self._queries)

    def _log_query(self, sql, starttime, endtime):
        entry = QueryLogEntry(query=sql, duration=round((endtime - starttime) * 1000.0, 2))
        with self._lock:
            self._queries.append(entry)
        logger.debug("Query executed in %.2fms: %s", entry.duration, sql)

    def query(self, sql, error_level=logging.ERROR):
        starttime = time.perf_counter()
        handle = self.real_conn.query(sql, error_level)
        endtime = time.perf_counter()
        self._log_query(sql, starttime, endtime)
        return handle

    def prepared_query(self, sql, parameters, error_level=logging.ERROR):
        # Only the template is logged, never the parameters.
        starttime = time.perf_counter()
        handle = self.real_conn.prepared_query(sql, parameters, error_level)
        endtime = time.perf_counter()
        self._log_query(sql, starttime, endtime)
        return handle

    def get_schema_manager(self):
        return self.real_conn.get_schema_manager()

    def get_query_builder(self):
        return self.real_conn.get_query_builder()

    def get_generated_id(self, table):
        return self.real_conn.get_generated_id(table)

    def is_active(self):
        return self.real_conn.is_active()

    def escape_string(self, value):
        return self.real_conn.escape_string(value)

    def quote_string(self, value):
        return self.real_conn.quote_string(value)

    def escape_identifier(self, value, separator="."):
        return self.real_conn.escape_identifier(value, separator)

    def comparison_clause(self, field, value, exact=False, negate=False, case_sensitive=None, parameterised=False):
        return self.real_conn.comparison_clause(field, value, exact, negate, case_sensitive, parameterised)

    def formatted_datetime_clause(self, date, format):
        return self.real_conn.formatted_datetime_clause(date, format)

    def datetime_interval_clause(self, date, interval):
        return self.real_conn.datetime_interval_clause(date, interval)

    def datetime_difference_clause(self, date1, date2):
        return self.real_conn.datetime_difference_clause(date1, date2)

    def supports_collations(self):
        return self.real_conn.supports_collations()

    def supports_timezone_override(self):
        return self.real_conn.supports_timezone_override()

    def get_version(self):
        return self.real_conn.get_version()

    def get_database_server(self):
        return self.real_conn.get_database_server()

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
        return self.real_conn.search_engine(
            classes_to_search,
            keywords,
            start,
            page_length,
            sort_by,
            extra_filter,
            boolean_search,
            alternative_file_filter,
            inverted_match,
        )

    def supports_transactions(self):
        return self.real_conn.supports_transactions()

    def transaction_start(self, transaction_mode=False, session_characteristics=False):
        return self.real_conn.transaction_start(transaction_mode, session_characteristics)

    def transaction_savepoint(self, savepoint):
        return self.real_conn.transaction_savepoint(savepoint)

    def transaction_rollback(self, savepoint=False):
        return self.real_conn.transaction_rollback(savepoint)

    def transaction_end(self, chain=False):
        return self.real_conn.transaction_end(chain)

    def get_selected_database(self):
        return self.real_conn.get_selected_database()

    def now(self):
        return self.real_conn.now()

    def random(self):
        return self.real_conn.random()

    # Deprecated helpers, forwarded as is.

    def create_database(self):
        return self.real_conn.create_database()

    def get_connect(self, parameters):
        return self.real_conn.get_connect(parameters)

    def create_table(self, table, fields=None, indexes=None, options=None, advanced_options=None):
        return self.real_conn.create_table(table, fields, indexes, options, advanced_options)

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
        return self.real_conn.alter_table(
            table, new_fields, new_indexes, altered_fields, altered_indexes, altered_options, advanced_options
        )

    def rename_table(self, old_table_name, new_table_name):
        return self.real_conn.rename_table(old_table_name, new_table_name)

    def create_field(self, table, field, spec):
        return self.real_conn.create_field(table, field, spec)

    def rename_field(self, table_name, old_name, new_name):
        return self.real_conn.rename_field(table_name, old_name, new_name)

    def field_list(self, table):
        return self.real_conn.field_list(table)

    def table_list(self):
        return self.real_conn.table_list()

    def has_table(self, table_name):
        return self.real_conn.has_table(table_name)

    def enum_values_for_field(self, table_name, field_name):
        return self.real_conn.enum_values_for_field(table_name, field_name)

    def addslashes(self, value):
        return self.real_conn.addslashes(value)

    def __getattr__(self, name):
        # Only called for attributes missing on the proxy.
        if name == "real_conn":
            raise AttributeError(name)
        return getattr(self.real_conn, name)
