"""
errors.py — Error Taxonomy
===========================
Every exception the engine raises on purpose derives from AlgoTraceError.

    InvalidInputError     – malformed / out-of-domain Algorithm Input.
                            Raised before a single Step exists.
    UnknownAlgorithmError – registry lookup miss (a flavour of bad input).
    OutOfOrderStepError   – a strategy broke the append-only Step protocol.
                            Programmer error; never caught by the engine.
    PlaybackCommandError  – a playback command issued in the wrong state
                            (double-click races etc.).  The controller
                            logs and ignores it unless running strict.
"""


class AlgoTraceError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(AlgoTraceError, ValueError):
    """The input cannot be traced by the requested algorithm."""


class UnknownAlgorithmError(InvalidInputError):
    def __init__(self, algorithm_id: str):
        super().__init__(f"Unknown algorithm: {algorithm_id}")
        self.algorithm_id = algorithm_id


class OutOfOrderStepError(AlgoTraceError, RuntimeError):
    """A Step was recorded out of sequence, or after the trace was sealed."""


class PlaybackCommandError(AlgoTraceError):
    def __init__(self, command: str, state: str, reason: str = ""):
        message = f"'{command}' is not allowed while {state}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.command = command
        self.state = state
