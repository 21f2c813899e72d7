from models import ResponseSignal

# Checked in order; the first entry with a matching fragment decides the message.
ERROR_MESSAGE_TABLE = [
    (("empty response",), ResponseSignal.EMPTY_RESPONSE),
    (("could not parse", "invalid json", "invalid response structure"), ResponseSignal.INVALID_API_RESPONSE),
    (("status 429", "quota", "rate limit"), ResponseSignal.QUOTA_EXCEEDED),
    (("status 408", "timeout", "timed out"), ResponseSignal.TIMEOUT),
    (("status 403", "forbidden", "permission"), ResponseSignal.PERMISSION_DENIED),
    (("status 401", "unauthorized", "invalid key", "api key not provided", "incorrect api key"), ResponseSignal.INVALID_KEY),
    (("not configured", "unsupported vision backend", "model was not set"), ResponseSignal.NOT_CONFIGURED),
    (("api failed",), ResponseSignal.PROVIDER_UNAVAILABLE),
]


def translate_error(error: BaseException) -> str:
    """User-facing message for an exception raised while handling a request.

    Never echoes the raw error text, which may carry provider payloads.
    """
    text = str(error or "").lower()
    if text:
        for fragments, signal in ERROR_MESSAGE_TABLE:
            if any(fragment in text for fragment in fragments):
                return signal.value
    return ResponseSignal.GENERIC_ERROR.value
