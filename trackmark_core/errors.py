class TrackmarkError(Exception):
    """ Base class for every error raised by the workout core """


class ValidationError(TrackmarkError):
    """ Raised when numeric input is non-finite or non-positive """

    def __init__(self, message: str = "Inputs have to be positive numbers!"):
        super().__init__(message)


class PositionUnavailableError(TrackmarkError):
    """ Raised when the position provider cannot supply a location """

    def __init__(self, message: str = "Could not get your position"):
        super().__init__(message)
