"""Exception types shared by the command-line tools."""


class CmdToolsError(Exception):
    """Base class for errors the tools report to the user."""


class StorageError(CmdToolsError):
    """The todo file could not be read, decoded or written."""


class PreviewError(CmdToolsError):
    """The markdown preview could not be generated or opened."""


class ItemNotFoundError(IndexError):
    """A 1-based task index is outside the list."""

    def __init__(self, index: int):
        super().__init__(f"Item {index} does not exist")
        self.index = index
