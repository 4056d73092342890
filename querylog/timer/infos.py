from asgiref.local import Local  # NOQA


local = Local()


def reinit(proxy=None):
    local.database_proxy = proxy


def get_current_proxy():
    return getattr(local, "database_proxy", None)


def get_current_timing_info():
    proxy = get_current_proxy()
    if proxy is None:
        return None
    queries = proxy.get_queries()
    return {
        "count": len(queries),
        "duration": round(sum(entry.duration for entry in queries), 2),
    }
