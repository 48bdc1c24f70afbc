import abc
import bz2
import gzip
import io
from functools import partial
from ..utilities.file_type import filetype


class Parser(metaclass=abc.ABCMeta):
    """Generic parser iterator. Base parser class.
    Plain, gzipped and bzipped files are recognised automatically."""

    def __init__(self, handle):
        self.__closed = False
        self._handle = self.__get_handle(handle)
        self.closed = False

    def __iter__(self):
        return self

    @staticmethod
    def __get_handle(handle):
        if isinstance(handle, io.IOBase):
            return handle
        if handle.endswith(".gz") or filetype(handle) == b"application/gzip":
            opener = gzip.open
        elif handle.endswith(".bz2") or filetype(handle) == b"application/x-bzip2":
            opener = bz2.open
        else:
            opener = partial(open, **{"buffering": 1})
        try:
            return opener(handle, "rt")
        except FileNotFoundError:
            raise FileNotFoundError("File not found: {0}".format(handle))

    @abc.abstractmethod
    def __next__(self):
        raise NotImplementedError("This is only an abstract method!")

    def __enter__(self):
        if self.closed is True:
            raise ValueError('I/O operation on closed file.')
        return self

    def __exit__(self, *args):
        _ = args
        self._handle.close()
        self.closed = True

    def close(self):
        """
        Alias for __exit__
        """
        self.__exit__()

    @property
    def name(self):
        """
        Return the filename.
        """
        if hasattr(self._handle, "name"):
            return self._handle.name
        return None

    @property
    def closed(self):
        """
        Boolean flag. If True, the file has been closed already.
        """
        return self.__closed

    @closed.setter
    def closed(self, *args):
        """
        :param args: boolean flag

        This sets the closed flag of the file.

        """
        if not isinstance(args[0], bool):
            raise TypeError("Invalid value: {0}".format(args[0]))

        self.__closed = args[0]
