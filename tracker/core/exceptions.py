"""Domain errors raised by core services."""


class EntityNotFoundError(LookupError):
    """A referenced entity does not exist for the given identifier.

    The message names the missing entity, e.g.
    "Error! This member doesn't exist in our DB".
    """

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"Error! This {entity} doesn't exist in our DB")


class EntityInUseError(ValueError):
    """An entity cannot be removed while other entities still reference it.

    Raised by stores that enforce referential integrity, e.g. removing a
    member that is still responsible for a task.
    """

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"Error! This {entity} is still referenced in our DB")
