class CurrencyException(Exception):
    pass


class ParseError(CurrencyException):
    def __init__(self, input: str, message: str):
        self.input = input
        self.message = message
        super().__init__(f"NumberParseError: couldn't parse number from '{input}': {message}")


class InvalidTargetError(CurrencyException):
    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Error: Invalid target currency '{target}'")


class ProviderError(CurrencyException):
    pass


class RequestError(ProviderError):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(f"RequestError: couldn't request data from currency API: {message}")


class JsonParseError(ProviderError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"JSONParseError: couldn't parse JSON returned by currency API: {message}")
