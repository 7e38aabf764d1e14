from __future__ import annotations


class YandexGPTError(RuntimeError):
    pass


class ConfigurationError(YandexGPTError):
    pass


class TransportError(YandexGPTError):
    def __init__(self, endpoint: str, status_code: int) -> None:
        super().__init__(f"Failed to fetch {endpoint} from YandexGPT: {status_code}")
        self.endpoint = endpoint
        self.status_code = status_code


class ResponseFormatError(YandexGPTError, ValueError):
    pass


class CallCancelledError(YandexGPTError):
    pass
