"""Error taxonomy shared by the core handlers and the API layer.

Every error carries a field-keyed message map (``errors``) which the API
layer renders verbatim as the response body, with ``status_code``.
"""


class DevConnectorError(Exception):
    status_code = 400

    def __init__(self, errors=None, **fields):
        self.errors = dict(errors or {}, **fields)
        super().__init__(self.errors)


class ValidationError(DevConnectorError):
    status_code = 400


class NotFoundError(DevConnectorError):
    status_code = 404


class ConflictError(DevConnectorError):
    status_code = 400


class AuthorizationError(DevConnectorError):
    status_code = 401


class ProfileNotFound(NotFoundError):
    def __init__(self, errors=None):
        super().__init__(errors or {"noprofile": "There is no profile for this user"})


class EntryNotFound(NotFoundError):
    pass


class PostNotFound(NotFoundError):
    def __init__(self, errors=None):
        super().__init__(errors or {"nopostfound": "No post found with that ID"})


class CommentNotFound(NotFoundError):
    def __init__(self, errors=None):
        super().__init__(errors or {"commentnotexists": "Comment does not exist"})


class HandleConflict(ConflictError):
    def __init__(self, errors=None):
        super().__init__(errors or {"handle": "That handle already exists"})


class AlreadyLiked(ConflictError):
    def __init__(self, errors=None):
        super().__init__(errors or {"alreadyliked": "User already liked this post"})


class NotLiked(ConflictError):
    def __init__(self, errors=None):
        super().__init__(errors or {"notliked": "You have not yet liked this post"})


class NotAuthorized(AuthorizationError):
    def __init__(self, errors=None):
        super().__init__(errors or {"notauthorized": "User not authorized"})


class StoreError(NotFoundError):
    """A document store failure, reported in the same shape as a missing document."""

    def __init__(self, errors=None):
        super().__init__(errors or {"store": "The requested resource could not be retrieved"})
