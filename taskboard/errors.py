class TaskStoreError(Exception):
    """The backing store failed to run a query (driver, network or constraint error)."""


class InvalidTaskIdError(Exception):
    """The id does not have the shape of the store's primary key."""

    def __init__(self, task_id: str):
        super().__init__(f"Malformed task id: {task_id!r}")
        self.task_id = task_id
