from __future__ import annotations
from uuid import UUID


class ReservoirError(Exception):
    """Base for every outcome a workflow reports instead of a success."""
    kind = "error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ReservoirError):
    kind = "validation"

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Please fill in all fields and upload a photo (invalid: {', '.join(self.fields)}).")


class DuplicatePendingError(ReservoirError):
    kind = "duplicate_pending"

    def __init__(self, postcode: str):
        self.postcode = postcode
        super().__init__("You already have a pending submission.")


class UploadError(ReservoirError):
    kind = "upload"

    def __init__(self, key: str):
        self.key = key
        super().__init__("Photo upload failed. Please try again.")


class PersistError(ReservoirError):
    kind = "persist"

    def __init__(self, photo_ref: str | None = None, message: str = "There was an error saving your entry."):
        # the photo under photo_ref may still exist in the blob store
        self.photo_ref = photo_ref
        super().__init__(message)


class NotFoundError(ReservoirError):
    kind = "not_found"

    def __init__(self, submission_id: UUID | str):
        self.submission_id = submission_id
        super().__init__(f"Submission not found: {submission_id}")


class FetchError(ReservoirError):
    kind = "fetch"

    def __init__(self, message: str = "Could not load submissions."):
        super().__init__(message)
