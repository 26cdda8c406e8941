"""Version information for the DVIDS SDK."""

SDK_NAME = "DVIDS-Python-Client"
SDK_VERSION = "0.1.0"


def user_agent() -> str:
    """Return the User-Agent string sent with API requests."""
    return f"{SDK_NAME}/{SDK_VERSION}"
