from __future__ import annotations


class XbelError(Exception):
    """Base class for every failure surfaced by xbelsync."""


class XbelIOError(XbelError):
    """The bookmarks file could not be opened, read or written."""


class XbelFormatError(XbelError):
    """The input is not a usable XBEL document."""


class MalformedId(XbelError):
    def __init__(self, value: str):
        super().__init__(f"Invalid item id (expected a non-negative integer): {value!r}")
        self.value = value


class AddressNotFound(XbelError):
    def __init__(self, address):
        super().__init__(f"Cannot find anything in Xbel matching: {address}")
        self.address = address


class NotAFolder(XbelError):
    def __init__(self, item_id: str):
        super().__init__(f"Item found with id: {item_id} but it is not a folder")
        self.item_id = item_id


class RootNotSupported(XbelError):
    def __init__(self, operation: str = "remove"):
        super().__init__(f"Cannot {operation} the root of the bookmarks tree")
        self.operation = operation


class PushWithoutRemote(XbelError):
    def __init__(self):
        super().__init__("Please provide a git repository url (or use --disable-push)")


class GitSyncError(XbelError):
    """A git invocation failed."""
