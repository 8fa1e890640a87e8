class GridSearchError(Exception):
    """Base class for recoverable errors reported to callers."""


class EmptyDictionaryError(GridSearchError):
    """No line of the dictionary source produced a word in the length window."""


class DictionarySourceError(GridSearchError):
    """The dictionary file or URL could not be read."""


class DictionaryNotLoadedError(GridSearchError):
    pass


class InvalidGridError(GridSearchError):
    """Grid letters have the wrong count or contain a non-letter cell."""
