"""
utils/uploads.py
----------------
Resolves an optional uploaded preview image to raw bytes
before it is persisted with a Category or Food.
"""

from typing import BinaryIO, Optional, Union

Upload = Union[bytes, bytearray, memoryview, BinaryIO]


def read_preview(upload: Optional[Upload]) -> Optional[bytes]:
    """
    Read an uploaded image into memory.

    Args:
        upload: Raw bytes, a readable binary file object, or None.

    Returns:
        The image bytes, or None when nothing was uploaded.

    Raises:
        TypeError: If the upload is neither bytes-like nor readable.
    """
    if upload is None:
        return None
    if isinstance(upload, (bytes, bytearray, memoryview)):
        return bytes(upload)
    if hasattr(upload, "read"):
        data = upload.read()
        if isinstance(data, str):
            raise TypeError("preview upload must be opened in binary mode")
        return bytes(data)
    raise TypeError(f"unsupported preview upload type: {type(upload).__name__}")
