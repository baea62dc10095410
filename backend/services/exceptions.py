# backend/services/exceptions.py
# Domain errors raised by the shoe services. main.py maps them to HTTP status codes.


class ShoeServiceError(Exception):
    """Base class for all domain errors of the shoe services."""


class NotFoundError(ShoeServiceError):
    def __init__(self, message="Not found"):
        super().__init__(message)
        self.message = message


class ArticleCodeExistsError(ShoeServiceError):
    def __init__(self, article_code):
        self.article_code = article_code
        self.message = f'The article code "{article_code}" already exists.'
        super().__init__(self.message)


class VersionInvalidError(ShoeServiceError):
    def __init__(self, version):
        self.version = version
        self.message = f'The version "{version}" is invalid.'
        super().__init__(self.message)


class VersionOutdatedError(ShoeServiceError):
    def __init__(self, version):
        self.version = version
        self.message = f'The version "{version}" is outdated.'
        super().__init__(self.message)
