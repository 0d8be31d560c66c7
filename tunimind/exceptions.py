class TuniMindError(Exception):
    """Base class for errors raised by the TuniMind services."""


class DataFormatError(TuniMindError, ValueError):
    """An import document does not have the expected shape."""


class MoodNotFoundError(TuniMindError, LookupError):
    pass


class AccountExistsError(TuniMindError):
    pass


class AccountNotFoundError(TuniMindError, LookupError):
    pass


class NotAuthenticatedError(TuniMindError):
    pass
