#!/usr/bin/env python3
# coding: utf_8


"""
Module to parse GFF3 files.
"""

import re
from sys import intern
from urllib.parse import unquote
from ..exceptions import InvalidParsingFormat
from .parser import Parser


def _attribute_definition(val):
    try:
        val = float(val)
        if val.is_integer():
            return int(val)
        return val
    except (ValueError, TypeError):
        if val.lower() in ("true", "false"):
            return val.lower() == "true"
        return val


# pylint: disable=too-many-instance-attributes
class GffLine:
    """Object which serializes a GFF line."""

    # The (?:;|$) means "match, but **do not capture**, either semicolon or end of the line.
    _attribute_pattern = re.compile(r"([^;]*)=([^$=]*)(?:;|$)")

    _exon_features = frozenset(["exon", "coding_exon", "noncoding_exon"])
    _cds_features = frozenset(["CDS"])
    _utr_features = frozenset(["UTR", "five_prime_UTR", "three_prime_UTR", "5UTR", "3UTR",
                               "five_prime_utr", "three_prime_utr"])
    _identifier_keys = frozenset(["ID", "id", "Id", "Parent", "parent", "Name"])

    def __init__(self, line, header=False):
        """
        Constructor method.
        :param line: the GFF line to be serialised
        :type line: (str|None)

        :param header: boolean flag that indicates whether the instance will be a header or not.
        :type header: bool
        """

        self.attributes = dict()
        self.chrom, self.source, self.feature = None, None, None
        self.start, self.end = None, None
        self.score, self.strand, self.phase = None, None, None
        self.id = None
        self.parent = []
        self._line = "" if line is None else line.rstrip("\n")
        self.header = header

        fields = self._line.split("\t")
        if self.header or len(fields) != 9 or self._line.strip() == "" or self._line[0] == "#":
            self.header = True
            return

        self.chrom, self.source, self.feature = [intern(_) for _ in fields[0:3]]
        try:
            self.start, self.end = tuple(int(i) for i in fields[3:5])
        except (ValueError, TypeError):
            error = "Invalid start and end values: {}\n".format(" ".join(fields[3:5]))
            error += "Line: {}".format(self._line)
            raise InvalidParsingFormat(error)
        if self.start > self.end:
            self.start, self.end = self.end, self.start

        self.score = None if fields[5] in (".", "") else _attribute_definition(fields[5])
        self.strand = fields[6] if fields[6] in ("+", "-") else None
        self.phase = None if fields[7] in (".", "") else int(fields[7])
        self._parse_attributes(fields[8])

    def _parse_attributes(self, attr):

        """
        Private method that parses the last field of the GFF line.
        :return:
        """

        infolist = self._attribute_pattern.findall(attr.rstrip().rstrip(";"))
        for key, val in infolist:
            key = key.strip()
            if key in self._identifier_keys:
                self.attributes[key] = unquote(val)
            else:
                self.attributes[key] = _attribute_definition(unquote(val))

        for key in ("ID", "id", "Id"):
            if key in self.attributes:
                self.id = str(self.attributes[key])
                break

        for key in ("Parent", "parent"):
            if key in self.attributes:
                self.parent = str(self.attributes[key]).split(",")
                break

    def __str__(self):
        return self._line

    def __len__(self):
        if self.header is False:
            return self.end - self.start + 1
        return 0

    @property
    def name(self):
        """
        Returns the name of the feature. It defaults to the ID if missing.
        """
        return self.attributes.get("Name", self.id)

    @property
    def is_gene(self):
        return self.header is False and (self.feature == "gene" or self.feature.endswith("_gene"))

    @property
    def is_transcript(self):
        """
        Property. True if the feature is an RNA, false otherwise.
        :rtype bool
        """

        if self.header is True or self.is_gene:
            return False
        if self.feature.endswith("transcript") or "RNA" in self.feature.upper():
            return True
        elif self.feature.endswith("_gene_segment"):
            return True
        return False

    @property
    def is_exon(self):
        return self.header is False and self.feature in self._exon_features

    @property
    def is_cds(self):
        return self.header is False and self.feature in self._cds_features

    @property
    def is_utr(self):
        return self.header is False and self.feature in self._utr_features


class GFF3(Parser):
    """
    Class that is used to parse a GFF file.
    """

    __annot_type__ = "gff3"

    def __init__(self, handle):
        """
        Constructor method.
        :param handle: the input file. It can be a file handle or a file name.
        :type handle: io.TextIOWrapper | str
        """
        super().__init__(handle)
        self.__fasta = False

    def __next__(self):

        if self.closed or self.__fasta:
            raise StopIteration
        line = next(self._handle)

        if line.startswith("##FASTA"):
            self.__fasta = True
            raise StopIteration
        if line[0] == "#":
            return GffLine(line, header=True)

        try:
            gff_line = GffLine(line)
        except (InvalidParsingFormat, ValueError) as exc:
            error = "Invalid line for file {}:\n{}\n{}".format(self.name, line, exc)
            raise InvalidParsingFormat(error)
        return gff_line

    @property
    def file_format(self):
        return self.__annot_type__
