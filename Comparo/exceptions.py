# coding:utf-8

"""
Custom exceptions for Comparo.
"""

from marshmallow import ValidationError


class NotInLocusError(AssertionError):
    """
    Error to be raised when a method tries to add a transcript to a Locus it does not belong to.
    """
    pass


class ModificationError(RuntimeError):
    """This exception is raised when something tries to modify a finalized object."""
    pass


class InvalidConfiguration(ValidationError, KeyError):
    """
    Exception to be raised when the JSON/YAML/TOML configuration is invalid.
    """
    pass


class InvalidTranscript(ValueError):
    """
    Exception to be raised when a transcript contains corrupted data
    (e.g. overlapping or missing exons).
    """

    pass


class InvalidCDS(InvalidTranscript):
    """
    Exception to be raised when a transcript contains an invalid CDS
    (e.g. with a UTR in the middle).
    """

    pass


class RedundantNames(KeyError):
    pass


class InvalidParsingFormat(TypeError):
    """
    Exception to be raised when the format specified for the parsing is incorrect
    """


class SourceQueryError(LookupError):
    """
    Exception to be raised when an annotation source cannot answer a query
    for a sequence (e.g. the sequence is unknown or the backing store failed).
    It is recorded per sequence by the LocusIndex rather than propagated.
    """

    def __init__(self, seqid, message, query_range=None):
        super().__init__(seqid, message, query_range)
        self.seqid = seqid
        self.message = message
        self.query_range = query_range

    def __str__(self):
        if self.query_range is None:
            return "{0}: {1}".format(self.seqid, self.message)
        return "{0}:{1}-{2}: {3}".format(self.seqid, self.query_range[0], self.query_range[1], self.message)


class LocusCapExceeded:
    """
    Value attached to a locus which was too large to be compared, either because
    it had too many transcripts or because it would have required too many comparisons.
    This is not raised; it is stored in the "skipped" attribute of the locus.
    """

    __slots__ = ["locus_id", "cap", "limit", "value"]

    def __init__(self, locus_id, cap, limit, value):
        self.locus_id = locus_id
        self.cap = cap
        self.limit = limit
        self.value = value

    def __str__(self):
        return "Locus {0} skipped: {1} is {2} (maximum {3})".format(
            self.locus_id, self.cap, self.value, self.limit)

    def __repr__(self):
        return "LocusCapExceeded({0!r}, {1!r}, {2!r}, {3!r})".format(
            self.locus_id, self.cap, self.limit, self.value)

    def __eq__(self, other):
        if not isinstance(other, LocusCapExceeded):
            return NotImplemented
        return (self.locus_id, self.cap, self.limit, self.value) == (
            other.locus_id, other.cap, other.limit, other.value)

    def __getstate__(self):
        return dict((key, getattr(self, key)) for key in self.__slots__)

    def __setstate__(self, state):
        for key, value in state.items():
            setattr(self, key, value)
