class AWSCtxException(Exception):
    """Errors the command line reports to the user"""

    pass


class SelectionCancelled(AWSCtxException):
    """The operator backed out of the profile picker"""


class NoProfilesFound(AWSCtxException):
    pass


class UnknownProfile(AWSCtxException):
    def __init__(self, profile):
        super().__init__(f"Profile '{profile}' not found")
        self.profile = profile


class NotAnSSOProfile(AWSCtxException):
    def __init__(self, profile):
        super().__init__(f"Profile '{profile}' is not an SSO profile")
        self.profile = profile
