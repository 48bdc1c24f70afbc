"""
Small module to recognise compressed inputs from their magic numbers.
"""

magic_dict = {
    b"\x1f\x8b\x08": b"application/gzip",
    b"\x42\x5a\x68": b"application/x-bzip2",
    }


max_len = max(len(x) for x in magic_dict)


def filetype(filename):
    """Return the MIME type of a file, as inferred from its first bytes."""
    with open(filename, "rb") as f:
        file_start = f.read(max_len)
    for magic, ftype in magic_dict.items():
        if file_start.startswith(magic):
            return ftype
    return b"application/txt"
