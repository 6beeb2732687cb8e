class AWSCtxServiceException(Exception):
    pass


class ConfigParseError(AWSCtxServiceException):
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path
