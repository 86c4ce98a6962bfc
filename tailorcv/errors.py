class GenerationError(Exception):
    """Base error for document generation; the message is shown to the user."""

    kind = "generation"


class ValidationError(GenerationError):
    kind = "validation"


class UpstreamError(GenerationError):
    kind = "upstream"


class StoreError(Exception):
    pass


class ProfileNotFound(StoreError):
    def __init__(self, user_id: str):
        super().__init__(f"No profile found for user {user_id}")
        self.user_id = user_id


class RecordNotFound(StoreError):
    def __init__(self, collection: str, record_id: str):
        super().__init__(f"No {collection} record with id {record_id}")
        self.collection = collection
        self.record_id = record_id
