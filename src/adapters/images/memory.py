"""
In-memory image store adapter - Implements ImageStore protocol.

Holds selected profile images for preview only. Nothing is uploaded or
written to disk; handles die with the process.
"""

import threading

from src.domain.ports import HeldImage
from src.domain.validation import new_local_ref


class InMemoryImageStore:
    """
    Implements ImageStore protocol with a dict keyed by local handle.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._images: dict[str, HeldImage] = {}
        self._lock = threading.Lock()

    def hold(self, content: bytes, media_type: str) -> str:
        ref = new_local_ref()
        with self._lock:
            self._images[ref] = HeldImage(content=content, media_type=media_type)
        return ref

    def get(self, ref: str) -> HeldImage | None:
        with self._lock:
            return self._images.get(ref)

    def release(self, ref: str) -> None:
        with self._lock:
            self._images.pop(ref, None)

    def __len__(self) -> int:
        return len(self._images)
