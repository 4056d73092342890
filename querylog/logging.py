from pythonjsonlogger.json import JsonFormatter

from querylog.timer.infos import get_current_timing_info


class QueryLogJSONFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if timing_info := get_current_timing_info():
            log_record["db.query_count"] = timing_info["count"]
            log_record["db.duration"] = timing_info["duration"]
