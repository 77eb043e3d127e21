"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class StoreUnavailableError(AdapterError):
    """The delegate store could not be reached."""

    pass
