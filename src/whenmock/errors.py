class WhenMockError(Exception):
    pass


class ConfigurationError(WhenMockError):
    """Raised when stubs are declared in a way that can never work as intended."""


class MatcherAssertionError(AssertionError):
    def __init__(self, msg, expected=None, actual=None):
        super().__init__(msg)
        self.expected = expected
        self.actual = actual


class VerificationError(AssertionError):
    def __init__(self, msg, expected, actual, uncalled=()):
        super().__init__(msg)
        self.expected = expected
        self.actual = actual
        self.uncalled = list(uncalled)


class RejectedValue(Exception):
    """Carries a non-exception value that a stub was told to reject with."""

    def __init__(self, value):
        super().__init__(value)
        self.value = value
