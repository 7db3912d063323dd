from __future__ import annotations


class RecipeShareError(Exception):
    pass


class BackendError(RecipeShareError):
    def __init__(self, operation: str, reason: str):
        super().__init__(reason)
        self.operation = operation
        self.reason = reason


class AuthenticationError(BackendError):
    pass


class StorageError(BackendError):
    pass


class StorageUploadError(StorageError):
    def __init__(self, bucket: str, object_name: str, reason: str = "Upload failed"):
        super().__init__("upload", reason)
        self.bucket = bucket
        self.object_name = object_name


class OwnershipError(RecipeShareError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Only the owner can modify recipe {recipe_id}")
        self.recipe_id = recipe_id


class FormValidationError(RecipeShareError):
    def __init__(self, errors: list[str]):
        super().__init__(f"Invalid form: {', '.join(errors)}")
        self.errors = errors


class LoginRequiredError(RecipeShareError):
    def __init__(self, message: str = "Login required"):
        super().__init__(message)


def reason_of(exc: BaseException) -> str:
    """Best-effort human message for an exception raised by the backend client."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
