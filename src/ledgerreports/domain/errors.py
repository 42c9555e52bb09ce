"""Error taxonomy for report generation."""


class StoreError(Exception):
    """A report request store read or write failed."""


class RequestNotFoundError(StoreError):
    def __init__(self, request_id: str, kind: str) -> None:
        super().__init__(f"Report request not found: {request_id}/{kind}")
        self.request_id = request_id
        self.kind = kind


class InvalidTransitionError(StoreError):
    def __init__(self, request_id: str, kind: str, current: str, target: str) -> None:
        super().__init__(f"Report request {request_id}/{kind} cannot move from {current} to {target}")
        self.request_id = request_id
        self.kind = kind
        self.current = current
        self.target = target


class AggregationError(Exception):
    """Computing or writing a report body failed."""


class UnknownKindError(ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown report kind: {kind}")
        self.kind = kind
