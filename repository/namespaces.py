# repository/namespaces.py
from typing import Final

KEY_SEPARATOR: Final[str] = "/"

SIGNATURE_SUFFIX: Final[str] = ".signature"
PAYLOAD_SUFFIX: Final[str] = ".json"
CREDENTIAL_SUFFIX: Final[str] = ".pwd"

RECYCLE: Final[str] = "recycle"
RECYCLE_PREFIX: Final[str] = f"{RECYCLE}{KEY_SEPARATOR}"  # recycle/<ts>/<original key>
USER_INDEX_KEY: Final[str] = "user.json"

LIST_PAGE_SIZE: Final[int] = 1000

JSON_CONTENT_TYPE: Final[str] = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE: Final[str] = "text/plain"
DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"


def object_key(namespace: str, name: str) -> str:
    return f"{namespace}{KEY_SEPARATOR}{name}"


def recycle_key(timestamp: str, key: str) -> str:
    return f"{RECYCLE_PREFIX}{timestamp}{KEY_SEPARATOR}{key}"
