"""Response messages returned in the `message` field of API bodies."""

SUCCESS = "SUCCESS"

INVALID_MINIMUM_DATE_ERROR = "INVALID_MINIMUM_DATE_ERROR"
INVALID_MAXIMUM_DATE_ERROR = "INVALID_MAXIMUM_DATE_ERROR"
MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR = "MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR"

INVALID_FILTER_ERROR = "INVALID_FILTER_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"
APPLICATION_NOT_FOUND_ERROR = "APPLICATION_NOT_FOUND_ERROR"
UNAUTHORIZED_ERROR = "UNAUTHORIZED_ERROR"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

LIST_BAD_REQUEST_ERRORS = (
    INVALID_MINIMUM_DATE_ERROR,
    INVALID_MAXIMUM_DATE_ERROR,
    MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR,
)
