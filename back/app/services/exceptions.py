class AdminUserAlreadyExistsError(Exception):
    def __init__(self, admin_id: str):
        super().__init__("User with this phone number already exists")
        self.admin_id = admin_id


class AdminUserNotFoundError(Exception):
    def __init__(self, admin_id: str):
        super().__init__("Admin user not found")
        self.admin_id = admin_id


class SelfModificationError(Exception):
    """An administrator tried to deactivate or delete their own account."""


class InvalidAssignedAreaError(ValueError):
    pass


class IssueNotFoundError(Exception):
    def __init__(self, issue_id: object):
        super().__init__("Issue not found")
        self.issue_id = issue_id


class PhotoLimitExceededError(ValueError):
    pass
