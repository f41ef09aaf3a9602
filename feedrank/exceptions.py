"""Ranking engine exceptions for feedrank."""


class RankingError(Exception):
    """Base exception for ranking engine errors."""

    pass


class InvalidProfileError(RankingError):
    """Raised when a profile violates the input contract (e.g. negative durations)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid profile: {reason}")


class InvalidCandidateError(RankingError):
    """Raised when a candidate item cannot be scored."""

    def __init__(self, reason: str, item_id: str | None = None):
        self.reason = reason
        self.item_id = item_id
        if item_id:
            super().__init__(f"Invalid candidate {item_id}: {reason}")
        else:
            super().__init__(f"Invalid candidate: {reason}")


class InvalidInteractionError(RankingError):
    """Raised when an interaction history carries impossible values."""

    def __init__(self, field_name: str, value):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid interaction history: {field_name}={value!r}")


class ConfigurationError(RankingError):
    """Raised when ranking configuration cannot be loaded or validated."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid ranking configuration ({source}): {reason}")


class SnapshotError(RankingError):
    """Raised when a ranking snapshot file cannot be read."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load snapshot ({source}): {reason}")
