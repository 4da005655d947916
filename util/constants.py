class InternalURIs:
    API = "/api"
    HEALTH = "/healthz"

    TRANSACTIONS_LIST = API + "/transactions/list"
    TRANSACTION = API + "/transaction/{namespace}/{filename}"
    TRANSACTION_RAW = TRANSACTION + "/raw"
    TRANSACTION_COMMIT = TRANSACTION + "/commit"
    TRANSACTION_REJECT = TRANSACTION + "/reject"

    USERS_LIST = API + "/users/list"
    USER = API + "/user/{username}"
    USER_SAVE = API + "/user/save"


class ExternalURIs:
    pass
