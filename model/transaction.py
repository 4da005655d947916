# model/transaction.py
from pydantic import BaseModel, ConfigDict
from repository.namespaces import (
    KEY_SEPARATOR,
    PAYLOAD_SUFFIX,
    RECYCLE,
    SIGNATURE_SUFFIX,
    object_key,
)
from util.enums import ErrorMessage
from util.errors import InvalidArgumentError


def validate_namespace(namespace: str) -> str:
    name = namespace or ""
    # Names are used verbatim as key prefixes; never rewrite them.
    if not name or name != name.strip() or KEY_SEPARATOR in name or name == RECYCLE:
        raise InvalidArgumentError.of(ErrorMessage.INVALID_NAMESPACE)
    return name


class TransactionRef(BaseModel):
    """
    A staged payload/signature pair, addressed by its signature file name.
    Both the commit and the reject path go through parse(), so a file name
    without the suffix never reaches the store.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    base: str

    @classmethod
    def parse(cls, namespace: str, filename: str) -> "TransactionRef":
        ns = validate_namespace(namespace)
        if not filename or not filename.endswith(SIGNATURE_SUFFIX):
            raise InvalidArgumentError.of(ErrorMessage.INVALID_SIGNATURE_NAME)
        base = filename[: -len(SIGNATURE_SUFFIX)]
        if not base or KEY_SEPARATOR in base:
            raise InvalidArgumentError.of(ErrorMessage.INVALID_SIGNATURE_NAME)
        return cls(namespace=ns, base=base)

    @property
    def signature_key(self) -> str:
        return object_key(self.namespace, self.base + SIGNATURE_SUFFIX)

    @property
    def payload_key(self) -> str:
        return object_key(self.namespace, self.base + PAYLOAD_SUFFIX)

    @property
    def keys(self) -> list[str]:
        return [self.payload_key, self.signature_key]
