FORWARDED_HEADERS = ("HTTP_X_FORWARDED_FOR", "HTTP_X_REAL_IP", "REMOTE_ADDR")


def client_ip(request) -> str:
    """
    Return the submitter's network origin.

    Proxies may append to X-Forwarded-For, so only the first entry is kept.
    """

    raw = ""
    for header in FORWARDED_HEADERS:
        value = request.META.get(header)
        if value:
            raw = value
            break
    return raw.split(",")[0].strip()
