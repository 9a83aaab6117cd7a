from enum import IntEnum


class ErrorCode(IntEnum):
    NOT_AUTHORIZED = 100
    INVALID_FARM_ID = 101
    INVALID_AMOUNT = 102
    INVALID_TIMESTAMP = 103
    INVALID_QUOTA = 104
    INVALID_PERIOD = 105
    FARM_ALREADY_REGISTERED = 106
    FARM_NOT_FOUND = 107
    LOG_ALREADY_EXISTS = 108
    ORACLE_NOT_VERIFIED = 109
    INVALID_MIN_USAGE = 110
    INVALID_MAX_USAGE = 111
    UPDATE_NOT_ALLOWED = 112
    INVALID_UPDATE_PARAM = 113
    MAX_LOGS_EXCEEDED = 114
    INVALID_USAGE_TYPE = 115
    INVALID_EFFICIENCY_RATE = 116
    INVALID_GRACE_PERIOD = 117
    INVALID_LOCATION = 118
    INVALID_UNIT = 119
    INVALID_STATUS = 120


class TrackerError(Exception):
    """Base class for every rule or permission violation in the tracker."""

    code = None

    def __init__(self, message, code=None):
        if code is not None:
            self.code = code
        super().__init__(message)


class NotAuthorized(TrackerError):
    """Raised when the caller may not perform the requested mutation."""

    code = ErrorCode.NOT_AUTHORIZED

    def __init__(self, caller, action):
        self.caller = caller
        self.action = action
        super().__init__(f"Principal {caller} is not authorized to {action}")


class InvalidField(TrackerError):
    """Raised when an input field fails its validation rule."""

    def __init__(self, code, field, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}", code=code)


class FarmNotFound(TrackerError):
    code = ErrorCode.FARM_NOT_FOUND

    def __init__(self, farm_id):
        self.farm_id = farm_id
        super().__init__(f"Farm {farm_id} does not exist")


class FarmAlreadyRegistered(TrackerError):
    code = ErrorCode.FARM_ALREADY_REGISTERED

    def __init__(self, owner):
        self.owner = owner
        super().__init__(f"Principal {owner} already owns a farm")


class OracleNotVerified(TrackerError):
    code = ErrorCode.ORACLE_NOT_VERIFIED

    def __init__(self):
        super().__init__("No oracle contract has been designated")


class MaxLogsExceeded(TrackerError):
    code = ErrorCode.MAX_LOGS_EXCEEDED

    def __init__(self, limit):
        self.limit = limit
        super().__init__(f"Farm identifier space exhausted at {limit}")


class LogAlreadyExists(TrackerError):
    code = ErrorCode.LOG_ALREADY_EXISTS

    def __init__(self, farm_id, sequence):
        self.farm_id = farm_id
        self.sequence = sequence
        super().__init__(f"Usage log {farm_id}-{sequence} already exists")


class TransferFailed(TrackerError):
    """Raised by a fee-transfer collaborator to abort the calling operation.

    The code is whatever the settlement layer reports, not necessarily one of
    the ErrorCode members.
    """

    def __init__(self, code, amount, payer, payee):
        self.amount = amount
        self.payer = payer
        self.payee = payee
        super().__init__(
            f"Transfer of {amount} from {payer} to {payee} failed with code {code}",
            code=code,
        )
