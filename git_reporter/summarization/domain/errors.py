"""Exceptions raised by the Summarization domain."""


class AdapterError(RuntimeError):
    """The language model could not produce a report."""
