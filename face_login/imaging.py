# coding: utf-8

"""
Photo Normalisation

Turns whatever the login screen captured (raw bytes, an open binary stream or
an OpenCV frame) into the image bytes the Face API accepts.
"""

from io import BytesIO
from typing import BinaryIO, Union

import cv2
import numpy as np
from PIL import Image

from .errors import InvalidPhotoError

Photo = Union[bytes, bytearray, memoryview, np.ndarray, BinaryIO]

JPEG_QUALITY = 95


def frame_to_jpeg(image: np.ndarray) -> bytes:
    """Encode an OpenCV BGR (or grayscale) frame as JPEG bytes"""
    if image.size == 0:
        raise InvalidPhotoError("Image frame is empty")

    try:
        # Convert BGR to RGB if needed
        if image.ndim == 3 and image.shape[2] == 3:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        elif image.ndim == 3 and image.shape[2] == 4:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
        else:
            image_rgb = image

        pil_image = Image.fromarray(image_rgb.astype(np.uint8))
        buffer = BytesIO()
        pil_image.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    except (cv2.error, TypeError, ValueError, OSError) as e:
        raise InvalidPhotoError(f"Could not encode image frame: {e}") from e
    return buffer.getvalue()


def photo_to_bytes(photo: Photo) -> bytes:
    """
    Read a photo into bytes

    Args:
        photo: bytes-like object, binary file-like object with ``read()``, or a
            numpy image frame

    Returns:
        Image bytes suitable for upload

    Raises:
        InvalidPhotoError: if the photo is empty or of an unsupported type
    """
    if isinstance(photo, np.ndarray):
        return frame_to_jpeg(photo)

    if isinstance(photo, (bytes, bytearray, memoryview)):
        data = bytes(photo)
    elif hasattr(photo, "read"):
        # Streams may already have been read by a previous attempt
        if hasattr(photo, "seek") and getattr(photo, "seekable", lambda: False)():
            photo.seek(0)
        data = photo.read()
        if isinstance(data, str):
            raise InvalidPhotoError("Photo stream must be opened in binary mode")
    else:
        raise InvalidPhotoError(f"Unsupported photo type: {type(photo).__name__}")

    if not data:
        raise InvalidPhotoError("Photo is empty")
    return data
