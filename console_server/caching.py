"""Cache-Control policy for served assets."""

ONE_DAY = 60 * 60 * 24

HTML_CACHE_CONTROL = "public, max-age=0"
DEFAULT_CACHE_CONTROL = f"public, max-age={ONE_DAY}"


def cache_control_for(content_type: str) -> str:
    """Return the Cache-Control directive for a response of ``content_type``.

    HTML is never kept fresh so a new deploy is picked up immediately;
    everything else (hashed JS/CSS bundles, images) is fresh for a day.
    """
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type == "text/html":
        return HTML_CACHE_CONTROL
    return DEFAULT_CACHE_CONTROL
