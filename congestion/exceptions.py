class CongestionControlError(Exception):

    pass


class UnknownAlgorithmError(CongestionControlError, KeyError):

    pass


class AlgorithmAlreadyRegisteredError(CongestionControlError):

    pass


class UnknownTunableError(CongestionControlError, KeyError):

    pass


class AlgorithmNotInitializedError(CongestionControlError):
    """
    Raised when a hook runs on a connection whose init() was never called.
    """

    pass
