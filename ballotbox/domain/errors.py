class ElectionError(ValueError):
    """Base class for every rejected election operation.

    ``reason`` is a stable machine-readable code; the message is for humans.
    """

    kind = "ElectionError"

    def __init__(self, reason: str, message: str = None):
        self.reason = reason
        self.message = message or reason
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.kind, "reason": self.reason, "message": self.message}


class AuthorizationError(ElectionError):
    kind = "AuthorizationError"


class ValidationError(ElectionError):
    kind = "ValidationError"


class TemporalError(ElectionError):
    kind = "TemporalError"


class EligibilityError(ElectionError):
    kind = "EligibilityError"


class RangeError(ElectionError):
    kind = "RangeError"


# Reason codes
UNAUTHORIZED = "Unauthorized"
INVALID_SCHEDULE = "InvalidSchedule"
END_IN_PAST = "EndInPast"
TOO_FEW_VOTERS = "TooFewVoters"
TOO_FEW_CANDIDATES = "TooFewCandidates"
AUTHORITY_AS_VOTER = "AuthorityAsVoter"
NOT_STARTED = "NotStarted"
ENDED = "Ended"
NOT_REGISTERED = "NotRegistered"
ALREADY_VOTED = "AlreadyVoted"
INVALID_CANDIDATE = "InvalidCandidate"
ELECTION_NOT_FOUND = "ElectionNotFound"
