# guardiao/services/errors.py
"""Service-level errors translated to HTTP responses by the routers."""


class NotFoundError(Exception):
    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StoreError(Exception):
    """A write was rejected by the database. Message is shown to the operator as-is."""
