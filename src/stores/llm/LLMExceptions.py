class VisionProviderError(Exception):
    """Base class for every failure of an outbound vision/LLM call."""


class ProviderNotConfiguredError(VisionProviderError):
    pass


class ProviderHTTPError(VisionProviderError):

    def __init__(self, provider: str, status_code: int, body: str = ""):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} API failed with status {status_code}: {body}")


class EmptyResponseError(VisionProviderError):

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} API returned empty response. Please try again.")


class InvalidJSONError(VisionProviderError):

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Could not parse {provider} API response. Invalid JSON.")


class InvalidResponseStructureError(VisionProviderError):

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} API returned invalid response structure")


class ProviderTimeoutError(VisionProviderError):

    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__(f"Vision request timeout after {seconds:g}s")
