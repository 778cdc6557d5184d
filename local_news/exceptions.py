class LocalNewsError(Exception):
    """Base class for errors raised inside the aggregation pipeline."""


class RSSFetchError(LocalNewsError):
    """A source's feed could not be downloaded or parsed. Caught per source."""


class ParseError(LocalNewsError):
    """A single feed entry has an unusable shape. Only that entry is skipped."""
